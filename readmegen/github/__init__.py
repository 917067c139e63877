"""GitHub metadata retrieval."""

from .client import FetchOutcome, GitHubClient, RepositorySnapshot, decode_manifest
from .urls import parse_repo_url

__all__ = [
    "FetchOutcome",
    "GitHubClient",
    "RepositorySnapshot",
    "decode_manifest",
    "parse_repo_url",
]
