"""Parsing of GitHub repository URLs."""

from __future__ import annotations

import re
from urllib.parse import urlparse

from ..errors import InvalidRepositoryURL
from ..models import RepoRef

_SSH_PATTERN = re.compile(r"^git@github\.com:(?P<owner>[^/\s]+)/(?P<repo>[^/\s]+?)/?$")
_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


def parse_repo_url(url: str) -> RepoRef:
    """Return the owner/repo pair for a GitHub URL.

    Accepts ``https://github.com/<owner>/<repo>[.git]``, the same with a
    ``git+`` prefix and ``git@github.com:<owner>/<repo>[.git]``.
    """
    cleaned = (url or "").strip()
    if cleaned.startswith("git+"):
        cleaned = cleaned[len("git+"):]

    ssh_match = _SSH_PATTERN.match(cleaned)
    if ssh_match:
        return _build_ref(url, ssh_match.group("owner"), ssh_match.group("repo"))

    parsed = urlparse(cleaned)
    if parsed.scheme not in {"http", "https"} or (parsed.hostname or "").lower() != "github.com":
        raise InvalidRepositoryURL(url)
    parts = [part for part in parsed.path.split("/") if part]
    if len(parts) < 2:
        raise InvalidRepositoryURL(url)
    return _build_ref(url, parts[0], parts[1])


def _build_ref(url: str, owner: str, repo: str) -> RepoRef:
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    if not owner or not repo or not _NAME_PATTERN.match(owner) or not _NAME_PATTERN.match(repo):
        raise InvalidRepositoryURL(url)
    return RepoRef(owner=owner, repo=repo)


__all__ = ["parse_repo_url"]
