"""Tests for completion reply parsing."""

from __future__ import annotations

import json

from readmegen.llm import sections as sections_module
from readmegen.llm.sections import (
    MAX_BLOCK_LINES,
    Structured,
    Unstructured,
    extract_sections,
    parse_completion,
    split_markdown_sections,
)
from readmegen.models import MAX_SECTION_CHARS, AiSections


def test_json_reply_is_used_without_fallback(monkeypatch) -> None:
    reply = '{"description":"d","features":"f","installation":"i","usage":"u"}'

    def _fail(_markdown: str) -> AiSections:
        raise AssertionError("heading splitter must not run for JSON replies")

    monkeypatch.setattr(sections_module, "split_markdown_sections", _fail)

    result = extract_sections(reply)

    assert result == AiSections(description="d", features="f", installation="i", usage="u")


def test_parse_completion_keeps_only_known_string_keys() -> None:
    parsed = parse_completion(json.dumps({"description": "  d  ", "usage": 3, "extra": "x"}))

    assert isinstance(parsed, Structured)
    assert parsed.sections.to_dict() == {"description": "d"}


def test_parse_completion_unwraps_json_fence() -> None:
    parsed = parse_completion('```json\n{"features": "- a"}\n```')

    assert parsed == Structured(AiSections(features="- a"))


def test_parse_completion_marks_non_json_as_unstructured() -> None:
    assert parse_completion("## Description\nd") == Unstructured(raw="## Description\nd")
    assert parse_completion("[1, 2]") == Unstructured(raw="[1, 2]")


def test_markdown_fallback_extracts_headings() -> None:
    result = extract_sections("## Description\nd\n\n## Features\n- f")

    assert result.description == "d"
    assert result.features == "- f"
    assert result.installation is None
    assert result.usage is None


def test_markdown_fallback_maps_heading_prefixes() -> None:
    markdown = "Intro text\n## Project Description\nabout\n## Installation steps\nnpm i\n## Usage\nrun\n## Other\nx"

    result = split_markdown_sections(markdown)

    assert result.to_dict() == {"description": "about", "installation": "npm i", "usage": "run"}


def test_unparseable_reply_yields_empty_sections() -> None:
    result = extract_sections("Sorry, I cannot help with that.")

    assert result.is_empty()
    assert result.to_dict() == {}


def test_sections_are_capped() -> None:
    long_text = "x" * (MAX_SECTION_CHARS + 10)
    many_lines = "\n".join(f"- item {index}" for index in range(MAX_BLOCK_LINES + 20))

    from_json = extract_sections(json.dumps({"usage": long_text}))
    from_markdown = split_markdown_sections(f"## Features\n{many_lines}")

    assert len(from_json.usage or "") == MAX_SECTION_CHARS
    assert (from_markdown.features or "").count("\n") == MAX_BLOCK_LINES - 1
