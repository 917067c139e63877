"""Core data models shared across readmegen components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

MAX_SECTION_CHARS = 12_000
AI_SECTION_KEYS: Tuple[str, ...] = ("description", "features", "installation", "usage")


@dataclass(frozen=True)
class RepoRef:
    """Owner/repository pair parsed from a URL."""

    owner: str
    repo: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True)
class RepositoryMetadata:
    """Snapshot of the GitHub repository record."""

    owner: str
    name: str
    description: str = ""
    homepage: Optional[str] = None
    license: Optional[str] = None
    default_branch: str = "main"
    topics: Tuple[str, ...] = ()
    html_url: str = ""

    @classmethod
    def from_api(
        cls,
        owner: str,
        repo: str,
        payload: Mapping[str, Any],
        topics: List[str] | Tuple[str, ...] = (),
    ) -> "RepositoryMetadata":
        name = _as_text(payload.get("name")) or repo
        license_info = payload.get("license")
        license_id: Optional[str] = None
        if isinstance(license_info, dict):
            license_id = _as_text(license_info.get("spdx_id")) or _as_text(
                license_info.get("name")
            )
        return cls(
            owner=owner,
            name=name,
            description=_as_text(payload.get("description")),
            homepage=_as_text(payload.get("homepage")) or None,
            license=license_id or None,
            default_branch=_as_text(payload.get("default_branch")) or "main",
            topics=tuple(topic for topic in topics if isinstance(topic, str) and topic),
            html_url=_as_text(payload.get("html_url")) or f"https://github.com/{owner}/{repo}",
        )


@dataclass(frozen=True)
class LanguageSummary:
    """Language percentages sorted by share, largest first."""

    percentages: Tuple[Tuple[str, float], ...] = ()

    def top(self, count: int = 5) -> List[str]:
        return [name for name, _ in self.percentages[:count]]

    def __bool__(self) -> bool:
        return bool(self.percentages)


@dataclass
class ManifestDescriptor:
    """Normalized view of a ``package.json`` file."""

    name: Optional[str] = None
    version: Optional[str] = None
    description: Optional[str] = None
    scripts: Dict[str, str] = field(default_factory=dict)
    dependencies: Dict[str, str] = field(default_factory=dict)
    dev_dependencies: Dict[str, str] = field(default_factory=dict)
    engines: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: object) -> "ManifestDescriptor":
        if not isinstance(data, dict):
            return cls()
        return cls(
            name=_as_text(data.get("name")) or None,
            version=_as_text(data.get("version")) or None,
            description=_as_text(data.get("description")) or None,
            scripts=_as_str_mapping(data.get("scripts")),
            dependencies=_as_str_mapping(data.get("dependencies")),
            dev_dependencies=_as_str_mapping(data.get("devDependencies")),
            engines=_as_str_mapping(data.get("engines")),
        )

    def dependency_names(self) -> List[str]:
        names = list(self.dependencies)
        names.extend(name for name in self.dev_dependencies if name not in self.dependencies)
        return names

    def is_empty(self) -> bool:
        return not any(
            (
                self.name,
                self.version,
                self.description,
                self.scripts,
                self.dependencies,
                self.dev_dependencies,
                self.engines,
            )
        )


@dataclass(frozen=True)
class TreeEntry:
    """One path from the recursive repository listing."""

    path: str
    kind: str = "file"

    @classmethod
    def from_api(cls, item: Mapping[str, Any]) -> Optional["TreeEntry"]:
        path = item.get("path")
        if not isinstance(path, str):
            return None
        kind = "directory" if item.get("type") == "tree" else "file"
        return cls(path=path, kind=kind)


@dataclass(frozen=True)
class DetectionFlags:
    """Signals derived from the repository file listing."""

    has_docker: bool = False
    has_ci: bool = False
    has_env_example: bool = False
    paths: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AiSections:
    """Optional LLM-written README fragments."""

    description: Optional[str] = None
    features: Optional[str] = None
    installation: Optional[str] = None
    usage: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: object) -> "AiSections":
        if not isinstance(data, dict):
            return cls()
        values = {key: sanitize_section(data.get(key)) for key in AI_SECTION_KEYS}
        return cls(**values)

    def is_empty(self) -> bool:
        return not any(getattr(self, key) for key in AI_SECTION_KEYS)

    def to_dict(self) -> Dict[str, str]:
        result: Dict[str, str] = {}
        for key in AI_SECTION_KEYS:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        return result


@dataclass
class RelayPayload:
    """Body sent to the relay endpoint."""

    owner: str
    repo: str
    description: Optional[str] = None
    languages: List[str] = field(default_factory=list)
    dependencies: List[str] = field(default_factory=list)
    scripts: Dict[str, str] = field(default_factory=dict)
    file_tree: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "owner": self.owner,
            "repo": self.repo,
            "languages": list(self.languages),
            "dependencies": list(self.dependencies),
            "scripts": dict(self.scripts),
        }
        if self.description:
            body["description"] = self.description
        if self.file_tree:
            body["fileTree"] = self.file_tree
        return body


@dataclass
class GeneratedReadme:
    """Result of one generation run."""

    markdown: str
    repository: RepositoryMetadata
    used_ai: bool = False
    tree_included: bool = False
    warnings: List[str] = field(default_factory=list)


def sanitize_section(value: object) -> Optional[str]:
    """Trim and cap a section value; non-strings are dropped."""
    if not isinstance(value, str):
        return None
    text = value.strip()
    if len(text) > MAX_SECTION_CHARS:
        text = text[:MAX_SECTION_CHARS]
    return text


def _as_text(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""


def _as_str_mapping(value: object) -> Dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {
        str(key): str(item)
        for key, item in value.items()
        if isinstance(item, (str, int, float)) and not isinstance(item, bool)
    }
