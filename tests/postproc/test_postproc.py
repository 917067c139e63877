"""Tests for README post-processing helpers."""

from __future__ import annotations

from readmegen.postproc.badges import BadgeBuilder, first_workflow
from readmegen.postproc.toc import TableOfContentsBuilder


def test_toc_builder_replaces_placeholder() -> None:
    builder = TableOfContentsBuilder()
    markdown = "\n".join(
        [
            "# Project",
            "",
            builder.PLACEHOLDER,
            "",
            "## Getting Started",
            "",
            "### Build & Test",
            "",
            "## FAQ",
        ]
    )

    result = builder.build(markdown)

    assert builder.PLACEHOLDER not in result
    assert "- [Getting Started](#getting-started)" in result
    assert "  - [Build & Test](#build--test)" in result
    assert "- [FAQ](#faq)" in result


def test_toc_builder_ignores_code_fences_and_deduplicates() -> None:
    builder = TableOfContentsBuilder()
    markdown = "\n".join(
        [
            builder.PLACEHOLDER,
            "## Usage",
            "```bash",
            "## not a heading",
            "```",
            "## Usage",
        ]
    )

    assert builder.headings(markdown) == [(2, "Usage", "usage"), (2, "Usage", "usage-1")]


def test_toc_builder_uses_given_entries_over_document_headings() -> None:
    builder = TableOfContentsBuilder()
    markdown = f"{builder.PLACEHOLDER}\n\n## Usage\n\n## Extra\n\n```bash\n"

    result = builder.build(markdown, [(2, "Usage"), (3, "Usage"), (2, "FAQ")])

    assert result.startswith(
        "## Table of Contents\n\n- [Usage](#usage)\n  - [Usage](#usage-1)\n- [FAQ](#faq)\n"
    )
    assert "[Extra]" not in result


def test_toc_builder_without_headings_removes_placeholder() -> None:
    builder = TableOfContentsBuilder()

    assert builder.build(f"# Title\n\n{builder.PLACEHOLDER}\n\nBody\n") == "# Title\n\nBody\n"


def test_toc_builder_leaves_markdown_without_placeholder() -> None:
    assert TableOfContentsBuilder().build("## Only\n") == "## Only\n"


def test_badge_builder_default_row() -> None:
    row = BadgeBuilder().build("acme", "widget")

    assert row.startswith("[![License](https://img.shields.io/github/license/acme/widget)](LICENSE)")
    assert "https://github.com/acme/widget/stargazers" in row
    assert "[![CI]" not in row


def test_badge_builder_ci_without_workflow_uses_checks_status() -> None:
    row = BadgeBuilder().build("acme", "widget", has_ci=True)

    assert row.startswith("[![CI](https://img.shields.io/github/checks-status/acme/widget/HEAD)]")


def test_first_workflow_picks_sorted_yaml() -> None:
    paths = [".github/workflows/release.yaml", ".github/workflows/ci.yml", ".github/workflows/README.md"]

    assert first_workflow(paths) == "ci.yml"
    assert first_workflow(["src/main.ts"]) is None
