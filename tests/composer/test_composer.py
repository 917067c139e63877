"""Tests for README composition."""

from __future__ import annotations

import re

from readmegen.composer import ReadmeComposer, compose_readme, docker_tag
from readmegen.composer.commands import install_command, manager_label, run_command
from readmegen.composer.constants import CLOSING_LINE, EMPTY_SCRIPTS_ROW, PLACEHOLDER_FEATURES
from readmegen.models import AiSections, DetectionFlags, ManifestDescriptor, RepositoryMetadata


def _metadata(**overrides: object) -> RepositoryMetadata:
    values: dict[str, object] = {"owner": "acme", "name": "widget"}
    values.update(overrides)
    return RepositoryMetadata(**values)  # type: ignore[arg-type]


def _section(markdown: str, title: str) -> str:
    match = re.search(rf"^## {re.escape(title)}\n\n(.*?)(?=^## |^---$)", markdown, re.MULTILINE | re.DOTALL)
    assert match, f"section {title!r} missing"
    return match.group(1).strip()


def test_compose_is_total_with_every_input_absent() -> None:
    markdown = compose_readme(_metadata())

    assert markdown.startswith("# widget\n")
    assert "- License: `N/A`" in markdown
    assert "Distributed under the `N/A` license." in _section(markdown, "License")
    assert _section(markdown, "Features") == "\n".join(PLACEHOLDER_FEATURES)
    assert EMPTY_SCRIPTS_ROW in markdown
    assert markdown.rstrip().endswith(CLOSING_LINE)
    for optional in ("Tech Stack", "Languages", "Usage", "Docker", "Folder Structure", "Dependencies"):
        assert f"## {optional}\n" not in markdown


def test_toc_lists_only_rendered_sections() -> None:
    markdown = compose_readme(_metadata())

    toc = _section(markdown, "Table of Contents")
    assert "- [Features](#features)" in toc
    assert "  - [Prerequisites](#prerequisites)" in toc
    assert "Docker" not in toc
    assert "<!-- readmegen:toc -->" not in markdown


def test_toc_ignores_headings_inside_ai_text() -> None:
    ai = AiSections(usage="### Example\nrun it\n## Troubleshooting\nhelp")

    markdown = compose_readme(_metadata(), ai=ai)

    toc = _section(markdown, "Table of Contents")
    assert "- [Usage](#usage)" in toc
    assert "Example" not in toc
    assert "Troubleshooting" not in toc


def test_toc_survives_unclosed_fence_in_ai_text() -> None:
    markdown = compose_readme(_metadata(), ai=AiSections(installation="```bash\nnpm i"))

    toc = markdown.split("## Table of Contents\n\n", 1)[1].split("\n\n", 1)[0]
    assert "  - [Installation](#installation)" in toc
    assert "- [License](#license)" in toc
    assert toc.splitlines()[-1] == "- [FAQ](#faq)"


def test_ai_features_take_precedence_over_topics() -> None:
    ai = AiSections(features="- Fast builds\n- Tiny bundles")

    markdown = compose_readme(_metadata(), topics=["cli", "tooling"], ai=ai)

    assert _section(markdown, "Features") == "- Fast builds\n- Tiny bundles"
    assert "- cli\n" not in _section(markdown, "Features")


def test_topics_become_feature_bullets_without_ai() -> None:
    markdown = compose_readme(_metadata(), topics=["cli", "tooling"])

    assert _section(markdown, "Features") == "- cli\n- tooling"
    assert "- Topics: `cli`, `tooling`" in markdown


def test_description_prefers_ai_then_repository_then_manifest() -> None:
    manifest = ManifestDescriptor(description="From package.json")
    repo_desc = compose_readme(_metadata(description="From GitHub"), manifest=manifest)
    ai_desc = compose_readme(
        _metadata(description="From GitHub"),
        manifest=manifest,
        ai=AiSections(description="First paragraph.\n\nSecond paragraph."),
    )
    manifest_desc = compose_readme(_metadata(), manifest=manifest)

    assert "> From GitHub" in repo_desc
    assert "> First paragraph.\n>\n> Second paragraph." in ai_desc
    assert "> From package.json" in manifest_desc


def test_docker_section_only_when_flagged() -> None:
    without = compose_readme(_metadata(name="My Cool App!"))
    with_docker = compose_readme(_metadata(name="My Cool App!"), flags=DetectionFlags(has_docker=True))

    assert "## Docker" not in without
    assert "docker build -t my-cool-app- ." in with_docker
    assert "docker run --rm -p 3000:3000 my-cool-app-" in with_docker


def test_docker_tag_collapses_non_alphanumeric_runs() -> None:
    assert docker_tag("My Cool App!") == "my-cool-app-"
    assert docker_tag("api__server.v2") == "api-server-v2"


def test_manifest_drives_scripts_dependencies_and_stack() -> None:
    manifest = ManifestDescriptor(
        version="1.2.3",
        scripts={"dev": "vite", "db:seed": "node seed.js | tee log"},
        dependencies={"react": "^18.2.0"},
        dev_dependencies={"typescript": "^5.4.0"},
        engines={"node": ">=18"},
    )

    markdown = compose_readme(_metadata(), manifest=manifest, package_manager="pnpm")

    assert "- Version: `1.2.3`" in markdown
    assert "| `dev` | `vite` | Start the development server |" in markdown
    assert "| `db:seed` | `node seed.js \\| tee log` | node seed.js \\| tee log |" in markdown
    assert _section(markdown, "Dependencies") == "- `react` ^18.2.0"
    assert _section(markdown, "Dev Dependencies") == "- `typescript` ^5.4.0"
    assert _section(markdown, "Tech Stack") == "- React\n- TypeScript"
    assert "- Node.js `>=18`" in markdown
    assert "pnpm install" in markdown
    assert "pnpm dev" in markdown


def test_scripts_with_backticks_keep_their_code_spans() -> None:
    manifest = ManifestDescriptor(scripts={"stamp": "echo `date`", "fence": "printf '``'"})

    scripts = _section(compose_readme(_metadata(), manifest=manifest), "Scripts")

    assert "| `stamp` | `` echo `date` `` |" in scripts
    assert "| `fence` | ``` printf '``' ``` |" in scripts


def test_dependency_list_is_capped() -> None:
    manifest = ManifestDescriptor(dependencies={f"dep-{index}": "1.0.0" for index in range(55)})

    section = _section(compose_readme(_metadata(), manifest=manifest), "Dependencies")

    assert section.count("\n- `dep-") == 49
    assert section.endswith("- ...and 5 more")


def test_languages_and_folder_structure() -> None:
    markdown = compose_readme(
        _metadata(), languages={"TypeScript": 912, "CSS": 88}, file_tree="├── src\n└── package.json"
    )

    assert _section(markdown, "Languages") == "- TypeScript: 91.2%\n- CSS: 8.8%"
    assert _section(markdown, "Folder Structure") == "```text\n├── src\n└── package.json\n```"


def test_configuration_mentions_detected_env_example() -> None:
    flags = DetectionFlags(has_env_example=True, paths=(".env.sample",))

    section = _section(compose_readme(_metadata(), flags=flags), "Configuration")

    assert "cp .env.sample .env" in section
    assert "Example variables:" in section


def test_ci_flag_adds_badge_and_section() -> None:
    flags = DetectionFlags(has_ci=True, paths=(".github/workflows/test.yml",))

    markdown = compose_readme(_metadata(), flags=flags)

    assert "actions/workflows/test.yml/badge.svg" in markdown
    assert "- `.github/workflows/test.yml`" in _section(markdown, "Continuous Integration")


def test_ai_installation_and_usage_replace_defaults() -> None:
    ai = AiSections(installation="pip install widget", usage="widget --help")

    markdown = ReadmeComposer().compose(_metadata(), ai=ai)

    assert "pip install widget" in markdown
    assert "git clone" not in markdown
    assert _section(markdown, "Usage") == "widget --help"


def test_commands_per_package_manager() -> None:
    assert install_command("yarn") == "yarn"
    assert install_command("bun") == "bun install"
    assert run_command("dev", "bun") == "bun run dev"
    assert run_command("start", "npm") == "npm start"
    assert run_command("build", "npm") == "npm run build"
    assert manager_label("npm") == "npm (bundled with Node.js)"
