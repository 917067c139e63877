"""Async GitHub REST client that gathers repository metadata."""

from __future__ import annotations

import asyncio
import base64
import binascii
import json
from dataclasses import dataclass, field
from typing import Any, Awaitable, Dict, Generic, List, Optional, TypeVar
from urllib.parse import quote

import httpx

from ..errors import MalformedUpstreamData, UpstreamError
from ..logging import get_logger
from ..models import ManifestDescriptor, RepoRef, RepositoryMetadata, TreeEntry

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_USER_AGENT = "readmegen"
MANIFEST_PATH = "package.json"

T = TypeVar("T")

logger = get_logger("github")


@dataclass(frozen=True)
class FetchOutcome(Generic[T]):
    """Value of an optional retrieval, or the reason it is missing."""

    value: Optional[T] = None
    missing: Optional[str] = None

    @classmethod
    def found(cls, value: T) -> "FetchOutcome[T]":
        return cls(value=value)

    @classmethod
    def absent(cls, reason: str) -> "FetchOutcome[T]":
        return cls(missing=reason)

    @property
    def ok(self) -> bool:
        return self.missing is None

    def unwrap_or(self, default: T) -> T:
        if self.ok and self.value is not None:
            return self.value
        return default


@dataclass
class RepositorySnapshot:
    """Everything fetched for one generation request."""

    metadata: RepositoryMetadata
    languages: Dict[str, int] = field(default_factory=dict)
    manifest: ManifestDescriptor = field(default_factory=ManifestDescriptor)
    tree: Optional[List[TreeEntry]] = None
    missing: Dict[str, str] = field(default_factory=dict)


class GitHubClient:
    """Retrieves repository record, languages, topics, manifest and tree."""

    def __init__(
        self,
        token: str | None = None,
        *,
        api_url: str = DEFAULT_API_URL,
        timeout: float | None = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent
        self._transport = transport

    async def fetch_snapshot(self, ref: RepoRef, *, include_tree: bool = True) -> RepositorySnapshot:
        """Fetch all metadata; only the repository record is mandatory."""
        async with self._client() as client:
            results = await asyncio.gather(
                self.fetch_repository(client, ref),
                self.fetch_languages(client, ref),
                self.fetch_topics(client, ref),
                self.fetch_manifest(client, ref),
                return_exceptions=True,
            )
            repo_payload, languages, topics, manifest = results
            if isinstance(repo_payload, BaseException):
                raise repo_payload

            optional: Dict[str, FetchOutcome[Any]] = {
                "languages": _settled(languages),
                "topics": _settled(topics),
                "manifest": _settled(manifest),
            }
            metadata = RepositoryMetadata.from_api(
                ref.owner, ref.repo, repo_payload, optional["topics"].unwrap_or([])
            )

            if include_tree:
                optional["tree"] = await self.fetch_tree(client, ref, metadata.default_branch)

        missing = {name: outcome.missing for name, outcome in optional.items() if outcome.missing}
        for name, reason in missing.items():
            logger.debug("Optional %s lookup for %s skipped: %s", name, ref.slug, reason)

        tree_outcome = optional.get("tree")
        return RepositorySnapshot(
            metadata=metadata,
            languages=optional["languages"].unwrap_or({}),
            manifest=optional["manifest"].unwrap_or(ManifestDescriptor()),
            tree=tree_outcome.value if tree_outcome is not None and tree_outcome.ok else None,
            missing=missing,
        )

    async def fetch_repository(self, client: httpx.AsyncClient, ref: RepoRef) -> Dict[str, Any]:
        """Fetch the repository record; failures propagate."""
        payload = await self._get_json(client, self._repo_path(ref))
        if not isinstance(payload, dict):
            raise UpstreamError("GitHub API", None, "repository record is not an object")
        return payload

    async def fetch_languages(self, client: httpx.AsyncClient, ref: RepoRef) -> FetchOutcome[Dict[str, int]]:
        async def _load() -> Dict[str, int]:
            payload = await self._get_json(client, f"{self._repo_path(ref)}/languages")
            if not isinstance(payload, dict):
                raise MalformedUpstreamData("languages payload is not an object")
            return {
                str(name): int(count)
                for name, count in payload.items()
                if isinstance(count, (int, float)) and not isinstance(count, bool)
            }

        return await _optional(_load())

    async def fetch_topics(self, client: httpx.AsyncClient, ref: RepoRef) -> FetchOutcome[List[str]]:
        async def _load() -> List[str]:
            payload = await self._get_json(client, f"{self._repo_path(ref)}/topics")
            names = payload.get("names") if isinstance(payload, dict) else None
            if not isinstance(names, list):
                raise MalformedUpstreamData("topics payload has no names list")
            return [name for name in names if isinstance(name, str)]

        return await _optional(_load())

    async def fetch_manifest(self, client: httpx.AsyncClient, ref: RepoRef) -> FetchOutcome[ManifestDescriptor]:
        async def _load() -> ManifestDescriptor:
            payload = await self._get_json(client, f"{self._repo_path(ref)}/contents/{MANIFEST_PATH}")
            content = payload.get("content") if isinstance(payload, dict) else None
            if not isinstance(content, str) or not content:
                raise MalformedUpstreamData(f"{MANIFEST_PATH} has no inline content")
            return decode_manifest(content)

        return await _optional(_load())

    async def fetch_tree(
        self, client: httpx.AsyncClient, ref: RepoRef, branch: str
    ) -> FetchOutcome[List[TreeEntry]]:
        """Fetch the recursive tree by branch name, then by the branch's commit sha."""
        return await _optional(self._load_tree(client, ref, branch))

    async def _load_tree(self, client: httpx.AsyncClient, ref: RepoRef, branch: str) -> List[TreeEntry]:
        try:
            return await self._tree_by_ref(client, ref, branch)
        except (UpstreamError, MalformedUpstreamData) as exc:
            logger.debug("Tree lookup by branch %r failed (%s); resolving commit sha", branch, exc)

        branch_payload = await self._get_json(
            client, f"{self._repo_path(ref)}/branches/{quote(branch, safe='')}"
        )
        commit = branch_payload.get("commit") if isinstance(branch_payload, dict) else None
        sha = commit.get("sha") if isinstance(commit, dict) else None
        if not isinstance(sha, str) or not sha:
            raise MalformedUpstreamData(f"branch {branch!r} has no commit sha")
        return await self._tree_by_ref(client, ref, sha)

    async def _tree_by_ref(self, client: httpx.AsyncClient, ref: RepoRef, tree_ref: str) -> List[TreeEntry]:
        payload = await self._get_json(
            client,
            f"{self._repo_path(ref)}/git/trees/{quote(tree_ref, safe='')}",
            params={"recursive": "1"},
        )
        items = payload.get("tree") if isinstance(payload, dict) else None
        if not isinstance(items, list):
            raise MalformedUpstreamData("tree payload has no tree list")
        if payload.get("truncated"):
            logger.info("GitHub truncated the tree listing for %s", ref.slug)
        entries = [TreeEntry.from_api(item) for item in items if isinstance(item, dict)]
        return [entry for entry in entries if entry is not None]

    # ------------------------------------------------------------------
    # HTTP helpers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.api_url,
            headers=self._headers(),
            timeout=self.timeout,
            transport=self._transport,
        )

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": self.user_agent,
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    @staticmethod
    def _repo_path(ref: RepoRef) -> str:
        return f"/repos/{quote(ref.owner, safe='')}/{quote(ref.repo, safe='')}"

    @staticmethod
    async def _get_json(
        client: httpx.AsyncClient, path: str, params: Dict[str, str] | None = None
    ) -> Any:
        try:
            response = await client.get(path, params=params)
        except httpx.HTTPError as exc:
            raise UpstreamError("GitHub API", None, str(exc)) from exc
        if not response.is_success:
            raise UpstreamError("GitHub API", response.status_code, response.text)
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedUpstreamData(f"GitHub API returned invalid JSON for {path}") from exc


def decode_manifest(content: str) -> ManifestDescriptor:
    """Decode the base64 ``package.json`` body returned by the contents API."""
    try:
        raw = base64.b64decode(content.replace("\n", ""), validate=False)
        data = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, ValueError) as exc:
        raise MalformedUpstreamData(f"{MANIFEST_PATH} could not be decoded") from exc
    return ManifestDescriptor.from_json(data)


async def _optional(operation: Awaitable[T]) -> FetchOutcome[T]:
    try:
        return FetchOutcome.found(await operation)
    except (UpstreamError, MalformedUpstreamData) as exc:
        return FetchOutcome.absent(str(exc))


def _settled(result: object) -> FetchOutcome[Any]:
    if isinstance(result, FetchOutcome):
        return result
    return FetchOutcome.absent(str(result))


__all__ = [
    "DEFAULT_API_URL",
    "FetchOutcome",
    "GitHubClient",
    "RepositorySnapshot",
    "decode_manifest",
]
