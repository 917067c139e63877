"""Pipeline orchestration for one README generation run."""

from __future__ import annotations

import asyncio
from typing import List, Optional

from .analyzers import detect_flags, infer_package_manager, render_tree_text, summarize_languages
from .composer import ReadmeComposer
from .config import ReadmeGenConfig
from .errors import UpstreamError
from .github import GitHubClient, RepositorySnapshot, parse_repo_url
from .logging import get_logger
from .models import AiSections, GeneratedReadme, LanguageSummary, RelayPayload
from .relay.client import RelayClient
from .stores import RELAY_KEY, CredentialStore, JsonCredentialStore, MemoryCredentialStore


class Orchestrator:
    """Coordinates metadata retrieval, optional AI enhancement and composition."""

    def __init__(
        self,
        config: ReadmeGenConfig | None = None,
        *,
        github_client: GitHubClient | None = None,
        relay_client: RelayClient | None = None,
        composer: ReadmeComposer | None = None,
        credential_store: CredentialStore | None = None,
    ) -> None:
        self.config = config
        self.logger = get_logger("orchestrator")
        self.composer = composer or ReadmeComposer()
        self.credential_store = credential_store or self._default_store(config)
        self.github_client = github_client or self._default_github_client(config)
        # Explicit configuration wins over a remembered key.
        self._relay_key = self._configured_relay_key(config) or self.credential_store.get(RELAY_KEY)
        self._relay_key_saved = False
        self.relay_client = relay_client or self._default_relay_client(config, self._relay_key)

    def generate(self, url: str, *, include_tree: bool = True, use_ai: bool = True) -> GeneratedReadme:
        """Synchronous wrapper around :meth:`generate_async`."""
        return asyncio.run(self.generate_async(url, include_tree=include_tree, use_ai=use_ai))

    async def generate_async(
        self, url: str, *, include_tree: bool = True, use_ai: bool = True
    ) -> GeneratedReadme:
        ref = parse_repo_url(url)
        self.logger.info("Generating README for %s", ref.slug)

        snapshot = await self.github_client.fetch_snapshot(ref, include_tree=include_tree)
        warnings: List[str] = []

        tree = snapshot.tree or []
        flags = detect_flags(tree)
        manager = infer_package_manager(flags.paths)
        summary = summarize_languages(snapshot.languages)
        file_tree = render_tree_text(tree) if include_tree and tree else ""
        if include_tree and not tree:
            warnings.append("Repository tree unavailable; folder structure omitted.")

        ai: Optional[AiSections] = None
        if use_ai:
            ai = await self._enhance(snapshot, summary, file_tree, warnings)

        metadata = snapshot.metadata
        markdown = self.composer.compose(
            metadata,
            summary,
            snapshot.manifest,
            list(metadata.topics),
            flags,
            package_manager=manager,
            ai=ai,
            file_tree=file_tree,
        )
        for warning in warnings:
            self.logger.warning(warning)
        return GeneratedReadme(
            markdown=markdown,
            repository=metadata,
            used_ai=ai is not None and not ai.is_empty(),
            tree_included=bool(file_tree),
            warnings=warnings,
        )

    async def _enhance(
        self,
        snapshot: RepositorySnapshot,
        summary: LanguageSummary,
        file_tree: str,
        warnings: List[str],
    ) -> Optional[AiSections]:
        if self.relay_client is None:
            warnings.append("AI enhancement skipped: no relay URL configured.")
            return None

        metadata = snapshot.metadata
        manifest = snapshot.manifest
        payload = RelayPayload(
            owner=metadata.owner,
            repo=metadata.name,
            description=metadata.description or manifest.description or "",
            languages=[name for name, _ in summary.percentages],
            dependencies=manifest.dependency_names(),
            scripts=dict(manifest.scripts),
            file_tree=file_tree or None,
        )
        try:
            sections = await self.relay_client.enhance(payload)
        except UpstreamError as exc:
            self.logger.debug("Relay call failed", exc_info=True)
            warnings.append(f"AI enhancement failed: {exc}")
            return None

        self._remember_relay_key()
        return sections

    def _remember_relay_key(self) -> None:
        if self._relay_key_saved or not self._relay_key:
            return
        if self.credential_store.get(RELAY_KEY) != self._relay_key:
            self.credential_store.set(RELAY_KEY, self._relay_key)
        self._relay_key_saved = True

    # ------------------------------------------------------------------
    # Defaults

    @staticmethod
    def _default_store(config: ReadmeGenConfig | None) -> CredentialStore:
        if config is not None and config.credentials_path is not None:
            return JsonCredentialStore(config.credentials_path)
        return MemoryCredentialStore()

    @staticmethod
    def _default_github_client(config: ReadmeGenConfig | None) -> GitHubClient:
        if config is None:
            return GitHubClient()
        return GitHubClient(config.github.token, api_url=config.github.api_url)

    @staticmethod
    def _configured_relay_key(config: ReadmeGenConfig | None) -> Optional[str]:
        return config.relay.api_key if config is not None else None

    @staticmethod
    def _default_relay_client(
        config: ReadmeGenConfig | None, api_key: Optional[str]
    ) -> Optional[RelayClient]:
        if config is None or not config.relay.url:
            return None
        return RelayClient(config.relay.url, api_key, timeout=config.relay.timeout)


__all__ = ["Orchestrator"]
