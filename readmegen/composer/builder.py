"""Deterministic README composition from repository metadata."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ..analyzers.detection import find_env_example
from ..analyzers.language import summarize_languages
from ..analyzers.stack import infer_tech_stack, script_hint
from ..models import (
    AiSections,
    DetectionFlags,
    LanguageSummary,
    ManifestDescriptor,
    RepositoryMetadata,
)
from ..postproc.badges import BadgeBuilder, first_workflow
from ..postproc.toc import TableOfContentsBuilder
from .constants import (
    ACKNOWLEDGEMENTS_BODY,
    CLOSING_LINE,
    CONTRIBUTING_BODY,
    EMPTY_SCRIPTS_ROW,
    EXAMPLE_ENV_BLOCK,
    FAQ_BODY,
    MAX_LISTED_DEPENDENCIES,
    PLACEHOLDER_FEATURES,
    ROADMAP_BODY,
    SECTION_TITLES,
    security_body,
)
from .commands import install_command, manager_label, run_command

_FENCE = "```"


@dataclass
class Section:
    """A level-2 README section."""

    name: str
    title: str
    body: str
    subsections: List["Section"] = field(default_factory=list)


class ReadmeComposer:
    """Assembles the README Markdown in a fixed section order.

    Every input is optional in practice: an empty manifest, no topics, no
    languages, no tree and no AI sections still produce a complete document.
    """

    def __init__(
        self,
        badge_builder: BadgeBuilder | None = None,
        toc_builder: TableOfContentsBuilder | None = None,
    ) -> None:
        self.badge_builder = badge_builder or BadgeBuilder()
        self.toc_builder = toc_builder or TableOfContentsBuilder()

    def compose(
        self,
        metadata: RepositoryMetadata,
        languages: Union[LanguageSummary, Mapping[str, int], None] = None,
        manifest: Optional[ManifestDescriptor] = None,
        topics: Optional[Sequence[str]] = None,
        flags: Optional[DetectionFlags] = None,
        package_manager: str = "npm",
        ai: Optional[AiSections] = None,
        file_tree: str = "",
    ) -> str:
        manifest = manifest or ManifestDescriptor()
        flags = flags or DetectionFlags()
        ai = ai or AiSections()
        summary = languages if isinstance(languages, LanguageSummary) else summarize_languages(languages or {})
        topic_list = list(topics) if topics is not None else list(metadata.topics)
        manager = package_manager or "npm"

        head: List[str] = [f"# {metadata.name}", ""]
        head.append(
            self.badge_builder.build(
                metadata.owner,
                metadata.name,
                has_ci=flags.has_ci,
                ci_workflow=first_workflow(flags.paths),
            )
        )
        head.append("")
        quote = self._build_description(metadata, manifest, ai)
        if quote:
            head.extend([quote, ""])

        about = self._build_about(metadata, manifest, topic_list)
        body: List[Optional[Section]] = [
            self._build_features(ai, topic_list),
            self._build_tech_stack(manifest),
            self._build_languages(summary),
            self._build_getting_started(metadata, manifest, ai, manager),
            self._build_scripts(manifest),
            self._build_dependency_list("dependencies", manifest.dependencies),
            self._build_dependency_list("dev_dependencies", manifest.dev_dependencies),
            self._build_configuration(flags),
            self._build_usage(ai),
            self._build_docker(metadata, flags),
            self._build_ci(flags),
            self._build_folder_structure(file_tree),
            Section("contributing", SECTION_TITLES["contributing"], CONTRIBUTING_BODY),
            Section("roadmap", SECTION_TITLES["roadmap"], ROADMAP_BODY),
            Section("security", SECTION_TITLES["security"], security_body(metadata.owner, metadata.name)),
            self._build_license(metadata),
            Section("acknowledgements", SECTION_TITLES["acknowledgements"], ACKNOWLEDGEMENTS_BODY),
            Section("faq", SECTION_TITLES["faq"], FAQ_BODY),
        ]

        rendered = [about] + [section for section in body if section is not None]
        lines = list(head)
        lines.extend(self._render_section(about))
        lines.extend([self.toc_builder.PLACEHOLDER, ""])
        for section in rendered[1:]:
            lines.extend(self._render_section(section))
        lines.extend(["---", "", CLOSING_LINE])

        markdown = "\n".join(lines).strip() + "\n"
        return self.toc_builder.build(markdown, self._outline(rendered))

    # ------------------------------------------------------------------
    # Section builders

    @staticmethod
    def _build_description(
        metadata: RepositoryMetadata, manifest: ManifestDescriptor, ai: AiSections
    ) -> str:
        text = ai.description or metadata.description or (manifest.description or "")
        text = text.strip()
        if not text:
            return ""
        return "\n".join(f"> {line}" if line.strip() else ">" for line in text.splitlines())

    @staticmethod
    def _build_about(
        metadata: RepositoryMetadata, manifest: ManifestDescriptor, topics: Sequence[str]
    ) -> Section:
        facts = [f"- Repository: https://github.com/{metadata.owner}/{metadata.name}"]
        if metadata.homepage:
            facts.append(f"- Homepage: {metadata.homepage}")
        facts.append(f"- Default branch: `{metadata.default_branch}`")
        facts.append(f"- License: `{metadata.license or 'N/A'}`")
        if manifest.version:
            facts.append(f"- Version: `{manifest.version}`")
        if topics:
            facts.append("- Topics: " + ", ".join(f"`{topic}`" for topic in topics))
        return Section("about", SECTION_TITLES["about"], "\n".join(facts))

    @staticmethod
    def _build_features(ai: AiSections, topics: Sequence[str]) -> Section:
        if ai.features:
            body = ai.features
        elif topics:
            body = "\n".join(f"- {topic}" for topic in topics)
        else:
            body = "\n".join(PLACEHOLDER_FEATURES)
        return Section("features", SECTION_TITLES["features"], body)

    @staticmethod
    def _build_tech_stack(manifest: ManifestDescriptor) -> Optional[Section]:
        stack = infer_tech_stack(manifest.dependency_names())
        if not stack:
            return None
        return Section("tech_stack", SECTION_TITLES["tech_stack"], "\n".join(f"- {item}" for item in stack))

    @staticmethod
    def _build_languages(summary: LanguageSummary) -> Optional[Section]:
        if not summary:
            return None
        body = "\n".join(f"- {name}: {percent}%" for name, percent in summary.percentages)
        return Section("languages", SECTION_TITLES["languages"], body)

    def _build_getting_started(
        self,
        metadata: RepositoryMetadata,
        manifest: ManifestDescriptor,
        ai: AiSections,
        manager: str,
    ) -> Section:
        node_engine = manifest.engines.get("node")
        runtime = f"- Node.js `{node_engine}`" if node_engine else "- Node.js (LTS recommended)"
        manager_engine = manifest.engines.get(manager)
        tool = manager_label(manager)
        if manager_engine:
            tool = f"{tool} `{manager_engine}`"
        prerequisites = "\n".join([runtime, f"- {tool}"])

        if ai.installation:
            installation = ai.installation
        else:
            installation = "\n".join(
                [
                    f"{_FENCE}bash",
                    "# Clone the repository",
                    f"git clone https://github.com/{metadata.owner}/{metadata.name}.git",
                    f"cd {metadata.name}",
                    "",
                    "# Install dependencies",
                    install_command(manager),
                    _FENCE,
                ]
            )

        running = "\n".join(
            [
                f"{_FENCE}bash",
                "# Start the development server",
                run_command("dev", manager),
                "",
                "# Build for production",
                run_command("build", manager),
                _FENCE,
            ]
        )
        return Section(
            "getting_started",
            SECTION_TITLES["getting_started"],
            "",
            subsections=[
                Section("prerequisites", SECTION_TITLES["prerequisites"], prerequisites),
                Section("installation", SECTION_TITLES["installation"], installation),
                Section("running_locally", SECTION_TITLES["running_locally"], running),
            ],
        )

    @staticmethod
    def _build_scripts(manifest: ManifestDescriptor) -> Section:
        rows = ["| Script | Command | Description |", "| --- | --- | --- |"]
        if not manifest.scripts:
            rows.append(EMPTY_SCRIPTS_ROW)
        for name, command in manifest.scripts.items():
            rows.append(
                f"| {_code_cell(name)} "
                f"| {_code_cell(command)} "
                f"| {_escape_cell(script_hint(name, command))} |"
            )
        return Section("scripts", SECTION_TITLES["scripts"], "\n".join(rows))

    @staticmethod
    def _build_dependency_list(name: str, dependencies: Dict[str, str]) -> Optional[Section]:
        if not dependencies:
            return None
        items = list(dependencies.items())
        lines = [f"- `{dep}` {version}".rstrip() for dep, version in items[: MAX_LISTED_DEPENDENCIES]]
        remaining = len(items) - MAX_LISTED_DEPENDENCIES
        if remaining > 0:
            lines.append(f"- ...and {remaining} more")
        return Section(name, SECTION_TITLES[name], "\n".join(lines))

    @staticmethod
    def _build_configuration(flags: DetectionFlags) -> Section:
        parts: List[str] = []
        if flags.has_env_example:
            example = find_env_example(flags.paths)
            parts.append("Copy the example environment file and adjust the values:")
            parts.append(f"{_FENCE}bash\ncp {example} .env\n{_FENCE}")
        parts.append("Example variables:")
        parts.append(EXAMPLE_ENV_BLOCK)
        return Section("configuration", SECTION_TITLES["configuration"], "\n\n".join(parts))

    @staticmethod
    def _build_usage(ai: AiSections) -> Optional[Section]:
        if not ai.usage:
            return None
        return Section("usage", SECTION_TITLES["usage"], ai.usage)

    @staticmethod
    def _build_docker(metadata: RepositoryMetadata, flags: DetectionFlags) -> Optional[Section]:
        if not flags.has_docker:
            return None
        tag = docker_tag(metadata.name)
        body = "\n".join(
            [
                f"{_FENCE}bash",
                "# Build the image",
                f"docker build -t {tag} .",
                "",
                "# Run the container",
                f"docker run --rm -p 3000:3000 {tag}",
                _FENCE,
            ]
        )
        return Section("docker", SECTION_TITLES["docker"], body)

    @staticmethod
    def _build_ci(flags: DetectionFlags) -> Optional[Section]:
        if not flags.has_ci:
            return None
        workflows = sorted(
            path for path in flags.paths if path.startswith(".github/workflows/") and path.endswith((".yml", ".yaml"))
        )
        lines = ["Workflows live in `.github/workflows/` and run on GitHub Actions."]
        if workflows:
            lines.append("")
            lines.extend(f"- `{path}`" for path in workflows)
        return Section("ci", SECTION_TITLES["ci"], "\n".join(lines))

    @staticmethod
    def _build_folder_structure(file_tree: str) -> Optional[Section]:
        if not file_tree.strip():
            return None
        return Section(
            "folder_structure",
            SECTION_TITLES["folder_structure"],
            f"{_FENCE}text\n{file_tree.rstrip()}\n{_FENCE}",
        )

    @staticmethod
    def _build_license(metadata: RepositoryMetadata) -> Section:
        license_id = metadata.license or "N/A"
        body = f"Distributed under the `{license_id}` license. See `LICENSE` for more information."
        return Section("license", SECTION_TITLES["license"], body)

    # ------------------------------------------------------------------
    # Rendering

    @staticmethod
    def _outline(sections: Sequence[Section], level: int = 2) -> List[Tuple[int, str]]:
        """Headings of the rendered sections; body text never contributes."""
        outline: List[Tuple[int, str]] = []
        for section in sections:
            outline.append((level, section.title))
            outline.extend(ReadmeComposer._outline(section.subsections, level + 1))
        return outline

    def _render_section(self, section: Section, level: int = 2) -> List[str]:
        lines = [f"{'#' * level} {section.title}", ""]
        if section.body.strip():
            lines.extend([section.body.rstrip(), ""])
        for child in section.subsections:
            lines.extend(self._render_section(child, level + 1))
        return lines


def docker_tag(name: str) -> str:
    """Lower-case ``name`` with every non-alphanumeric run collapsed to one hyphen."""
    return re.sub(r"[^a-z0-9]+", "-", name.lower())


def compose_readme(
    metadata: RepositoryMetadata,
    languages: Union[LanguageSummary, Mapping[str, int], None] = None,
    manifest: Optional[ManifestDescriptor] = None,
    topics: Optional[Sequence[str]] = None,
    flags: Optional[DetectionFlags] = None,
    package_manager: str = "npm",
    ai: Optional[AiSections] = None,
    file_tree: str = "",
) -> str:
    return ReadmeComposer().compose(
        metadata,
        languages,
        manifest,
        topics,
        flags,
        package_manager,
        ai,
        file_tree,
    )


def _escape_cell(value: str) -> str:
    return value.replace("|", "\\|").replace("\n", " ")


def _code_cell(value: str) -> str:
    # The delimiter must be longer than any backtick run inside the span.
    text = _escape_cell(value)
    longest = max((len(run) for run in re.findall(r"`+", text)), default=0)
    if not longest:
        return f"`{text}`"
    fence = "`" * (longest + 1)
    return f"{fence} {text} {fence}"


__all__ = ["ReadmeComposer", "Section", "compose_readme", "docker_tag"]
