"""Table-of-contents generation from README headings."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional, Tuple

Heading = Tuple[int, str]


class TableOfContentsBuilder:
    """Replaces the placeholder with links to level-2/3 headings.

    Callers that know their section outline pass it as ``entries``; otherwise
    the headings are scanned from the Markdown itself.
    """

    PLACEHOLDER = "<!-- readmegen:toc -->"
    TITLE = "Table of Contents"

    def build(self, markdown: str, entries: Optional[Iterable[Heading]] = None) -> str:
        if self.PLACEHOLDER not in markdown:
            return markdown
        if entries is None:
            anchored = self.headings(markdown)
        else:
            anchored = self.anchor(entries)
        block = self._render(anchored)
        if not block:
            return markdown.replace(self.PLACEHOLDER + "\n\n", "", 1).replace(
                self.PLACEHOLDER, "", 1
            )
        return markdown.replace(self.PLACEHOLDER, block, 1)

    def headings(self, markdown: str) -> List[Tuple[int, str, str]]:
        """Return ``(level, title, anchor)`` for headings outside code fences."""
        found: List[Heading] = []
        in_code = False
        for line in markdown.splitlines():
            stripped = line.strip()
            if stripped.startswith("```"):
                in_code = not in_code
                continue
            if in_code:
                continue
            match = re.match(r"^(#{2,3})\s+(.*)$", stripped)
            if match:
                found.append((len(match.group(1)), match.group(2).strip()))
        return self.anchor(found)

    def anchor(self, entries: Iterable[Heading]) -> List[Tuple[int, str, str]]:
        """Attach GitHub-style anchors, numbering repeated slugs."""
        anchored: List[Tuple[int, str, str]] = []
        seen: Dict[str, int] = {}
        for level, title in entries:
            if title == self.TITLE:
                continue
            slug = self._slugify(title)
            count = seen.get(slug, 0)
            seen[slug] = count + 1
            anchored.append((level, title, slug if count == 0 else f"{slug}-{count}"))
        return anchored

    def _render(self, anchored: List[Tuple[int, str, str]]) -> str:
        if not anchored:
            return ""
        output: List[str] = [f"## {self.TITLE}", ""]
        for level, title, anchor in anchored:
            indent = "  " * (level - 2)
            output.append(f"{indent}- [{title}](#{anchor})")
        return "\n".join(output)

    @staticmethod
    def _slugify(title: str) -> str:
        # GitHub keeps one hyphen per space, so "Build & Test" becomes "build--test".
        slug = title.strip().lower()
        slug = re.sub(r"[^\w\- ]", "", slug)
        return slug.replace(" ", "-")


__all__ = ["TableOfContentsBuilder"]
