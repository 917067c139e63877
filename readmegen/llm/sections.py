"""Two-stage parsing of completion replies into README sections."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

from ..models import AI_SECTION_KEYS, AiSections

MAX_BLOCK_LINES = 400

_FENCED_JSON = re.compile(r"^```(?:json)?\s*\n(?P<body>.*)\n```\s*$", re.DOTALL)
_HEADING_SPLIT = re.compile(r"\n(?=##\s+)")
_HEADING = re.compile(r"^##\s+([^\n]+)\n?(.*)$", re.DOTALL)

# Prefix (lower-cased heading) -> section key; first match wins.
_HEADING_KEYS: Tuple[Tuple[str, str], ...] = (
    ("project description", "description"),
    ("description", "description"),
    ("features", "features"),
    ("installation", "installation"),
    ("usage", "usage"),
)


@dataclass(frozen=True)
class Structured:
    """Reply was a JSON object; only the expected keys are kept."""

    sections: AiSections


@dataclass(frozen=True)
class Unstructured:
    """Reply was not JSON; the raw text is kept for the heading splitter."""

    raw: str


ParsedCompletion = Union[Structured, Unstructured]


def parse_completion(text: str) -> ParsedCompletion:
    """Attempt a strict JSON parse of the reply."""
    candidate = text.strip()
    fenced = _FENCED_JSON.match(candidate)
    if fenced:
        candidate = fenced.group("body").strip()
    try:
        data = json.loads(candidate)
    except (json.JSONDecodeError, ValueError):
        return Unstructured(raw=text)
    if not isinstance(data, dict):
        return Unstructured(raw=text)
    return Structured(sections=AiSections.from_mapping({key: data.get(key) for key in AI_SECTION_KEYS}))


def split_markdown_sections(markdown: str) -> AiSections:
    """Map ``## Heading`` blocks onto the four section keys."""
    found: Dict[str, str] = {}
    for chunk in _HEADING_SPLIT.split(markdown.strip()):
        match = _HEADING.match(chunk.strip())
        if not match:
            continue
        key = _heading_key(match.group(1))
        if key is None:
            continue
        found[key] = _take_lines(match.group(2).strip(), MAX_BLOCK_LINES)
    return AiSections.from_mapping(found)


def extract_sections(text: str) -> AiSections:
    """Parse JSON first; the heading splitter runs only when that fails."""
    parsed = parse_completion(text)
    if isinstance(parsed, Structured):
        return parsed.sections
    return split_markdown_sections(parsed.raw)


def _heading_key(title: str) -> Optional[str]:
    lowered = title.strip().lower()
    for prefix, key in _HEADING_KEYS:
        if lowered.startswith(prefix):
            return key
    return None


def _take_lines(text: str, limit: int) -> str:
    lines: List[str] = re.split(r"\r?\n", text)
    return "\n".join(lines[:limit])


__all__ = [
    "MAX_BLOCK_LINES",
    "ParsedCompletion",
    "Structured",
    "Unstructured",
    "extract_sections",
    "parse_completion",
    "split_markdown_sections",
]
