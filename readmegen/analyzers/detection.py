"""Detection flags derived from the repository file listing."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Iterable

from ..models import DetectionFlags, TreeEntry

_DOCKER_FILES = {"Dockerfile", "dockerfile", "Containerfile"}
_ENV_EXAMPLES = {".env.example", ".env.sample", ".env.template", "example.env"}
_CI_PREFIX = ".github/workflows/"


def detect_flags(entries: Iterable[TreeEntry]) -> DetectionFlags:
    paths = tuple(entry.path for entry in entries)
    has_docker = False
    has_ci = False
    has_env_example = False
    for path in paths:
        name = PurePosixPath(path).name
        if name in _DOCKER_FILES or name.startswith("Dockerfile."):
            has_docker = True
        if path.startswith(_CI_PREFIX) or path == _CI_PREFIX.rstrip("/"):
            has_ci = True
        if name in _ENV_EXAMPLES:
            has_env_example = True
    return DetectionFlags(
        has_docker=has_docker,
        has_ci=has_ci,
        has_env_example=has_env_example,
        paths=paths,
    )


def find_env_example(paths: Iterable[str]) -> str:
    """Return the shallowest env example path, defaulting to ``.env.example``."""
    candidates = sorted(
        (path for path in paths if PurePosixPath(path).name in _ENV_EXAMPLES),
        key=lambda path: (path.count("/"), path),
    )
    return candidates[0] if candidates else ".env.example"


__all__ = ["detect_flags", "find_env_example"]
