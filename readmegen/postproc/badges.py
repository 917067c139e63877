"""Shields.io badge row for generated README files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Iterable, List, Optional

_WORKFLOW_DIR = ".github/workflows/"


@dataclass
class BadgeBuilder:
    """Builds the badge line shown under the README title."""

    SHIELDS = "https://img.shields.io/github"

    def build(self, owner: str, repo: str, *, ci_workflow: Optional[str] = None, has_ci: bool = False) -> str:
        base = f"https://github.com/{owner}/{repo}"
        badges: List[str] = []
        if has_ci:
            badges.append(self._ci_badge(owner, repo, ci_workflow))
        badges.extend(
            [
                f"[![License]({self.SHIELDS}/license/{owner}/{repo})](LICENSE)",
                f"[![Stars]({self.SHIELDS}/stars/{owner}/{repo}?style=flat)]({base}/stargazers)",
                f"[![Issues]({self.SHIELDS}/issues/{owner}/{repo})]({base}/issues)",
                f"[![Last Commit]({self.SHIELDS}/last-commit/{owner}/{repo})]({base}/commits)",
            ]
        )
        return " ".join(badges)

    def _ci_badge(self, owner: str, repo: str, workflow: Optional[str]) -> str:
        actions = f"https://github.com/{owner}/{repo}/actions"
        if workflow:
            return f"[![CI]({actions}/workflows/{workflow}/badge.svg)]({actions}/workflows/{workflow})"
        return f"[![CI]({self.SHIELDS}/checks-status/{owner}/{repo}/HEAD)]({actions})"


def first_workflow(paths: Iterable[str]) -> Optional[str]:
    """Return the file name of the first workflow definition, sorted by path."""
    workflows = sorted(
        path
        for path in paths
        if path.startswith(_WORKFLOW_DIR) and path.endswith((".yml", ".yaml"))
    )
    if not workflows:
        return None
    return PurePosixPath(workflows[0]).name


__all__ = ["BadgeBuilder", "first_workflow"]
