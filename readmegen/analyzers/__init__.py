"""Pure analysis helpers over already-fetched repository data."""

from __future__ import annotations

from .detection import detect_flags
from .language import summarize_languages
from .stack import infer_package_manager, infer_tech_stack, script_hint
from .tree import MAX_TREE_LINES, SKIPPED_NAMES, format_tree, render_tree_text

__all__ = [
    "MAX_TREE_LINES",
    "SKIPPED_NAMES",
    "detect_flags",
    "format_tree",
    "infer_package_manager",
    "infer_tech_stack",
    "render_tree_text",
    "script_hint",
    "summarize_languages",
]
