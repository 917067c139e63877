"""ASCII rendering of a repository's recursive file listing."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import islice
from typing import Dict, Iterable, Iterator, List, Sequence, Union

from ..models import TreeEntry

MAX_TREE_LINES = 300

SKIPPED_NAMES = frozenset(
    {
        "node_modules",
        "dist",
        "build",
        ".next",
        ".git",
        ".vercel",
        "coverage",
    }
)

_BRANCH = "├── "
_LAST = "└── "
_PIPE = "│   "
_BLANK = "    "


@dataclass
class FileNode:
    """Leaf of the repository tree."""


@dataclass
class DirectoryNode:
    """Directory with its children keyed by path segment."""

    children: Dict[str, "TreeNode"] = field(default_factory=dict)


TreeNode = Union[FileNode, DirectoryNode]


def insert_path(root: DirectoryNode, segments: Sequence[str], kind: str) -> None:
    """Insert one path below ``root``, creating intermediate directories."""
    current = root
    for index, segment in enumerate(segments):
        is_last = index == len(segments) - 1
        existing = current.children.get(segment)
        if is_last:
            if existing is None:
                current.children[segment] = DirectoryNode() if kind == "directory" else FileNode()
            elif isinstance(existing, FileNode) and kind == "directory":
                current.children[segment] = DirectoryNode()
            return
        if not isinstance(existing, DirectoryNode):
            # A segment with descendants is a directory whatever it was declared as.
            existing = DirectoryNode()
            current.children[segment] = existing
        current = existing


def build_tree(entries: Iterable[TreeEntry]) -> DirectoryNode:
    root = DirectoryNode()
    for entry in entries:
        insert_path(root, entry.path.split("/"), entry.kind)
    return root


def format_tree(entries: Iterable[TreeEntry], *, max_lines: int = MAX_TREE_LINES) -> List[str]:
    """Render entries as box-drawing lines, pruning noise directories.

    Output stops after ``max_lines`` lines; a truncated listing is not an error.
    """
    root = build_tree(entries)
    return list(islice(_render(root, ""), max_lines))


def render_tree_text(entries: Iterable[TreeEntry], *, max_lines: int = MAX_TREE_LINES) -> str:
    return "\n".join(format_tree(entries, max_lines=max_lines))


def _render(node: DirectoryNode, prefix: str) -> Iterator[str]:
    names = sorted(name for name in node.children if name not in SKIPPED_NAMES)
    for index, name in enumerate(names):
        is_last = index == len(names) - 1
        yield f"{prefix}{_LAST if is_last else _BRANCH}{name}"
        child = node.children[name]
        if isinstance(child, DirectoryNode):
            yield from _render(child, prefix + (_BLANK if is_last else _PIPE))


__all__ = [
    "DirectoryNode",
    "FileNode",
    "MAX_TREE_LINES",
    "SKIPPED_NAMES",
    "TreeNode",
    "build_tree",
    "format_tree",
    "insert_path",
    "render_tree_text",
]
