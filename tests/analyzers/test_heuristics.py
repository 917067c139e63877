"""Tests for package manager, stack, script, detection and language heuristics."""

from __future__ import annotations

import pytest

from readmegen.analyzers import (
    detect_flags,
    infer_package_manager,
    infer_tech_stack,
    script_hint,
    summarize_languages,
)
from readmegen.analyzers.detection import find_env_example
from readmegen.models import TreeEntry


@pytest.mark.parametrize(
    ("paths", "expected"),
    [
        (["pnpm-lock.yaml", "yarn.lock", "bun.lockb", "package-lock.json"], "pnpm"),
        (["yarn.lock", "pnpm-lock.yaml"], "pnpm"),
        (["yarn.lock", "bun.lockb"], "yarn"),
        (["bun.lockb"], "bun"),
        (["bun.lock"], "bun"),
        (["package-lock.json"], "npm"),
        ([], "npm"),
    ],
)
def test_infer_package_manager(paths: list[str], expected: str) -> None:
    assert infer_package_manager(paths) == expected


def test_infer_package_manager_ignores_nested_lockfiles() -> None:
    assert infer_package_manager(["examples/demo/pnpm-lock.yaml"]) == "npm"


def test_infer_tech_stack_uses_table_order() -> None:
    deps = ["zod", "typescript", "react", "@radix-ui/react-dialog", "@radix-ui/react-toast", "vite"]

    assert infer_tech_stack(deps) == ["React", "Vite", "TypeScript", "shadcn/ui + Radix UI", "Zod"]


def test_infer_tech_stack_matches_scoped_packages() -> None:
    deps = ["@nestjs/core", "@prisma/client", "@supabase/supabase-js", "@tanstack/react-query", "@playwright/test"]

    assert infer_tech_stack(deps) == ["NestJS", "Prisma", "Supabase", "React Query", "Playwright"]


def test_infer_tech_stack_requires_exact_plain_names() -> None:
    assert infer_tech_stack(["react-dom", "next-auth", "eslint-plugin-react"]) == []


@pytest.mark.parametrize(
    ("name", "hint"),
    [
        ("dev", "Start the development server"),
        ("build", "Build for production"),
        ("test", "Run the test suite"),
        ("test:e2e", "Run the test suite"),
        ("type-check", "Type-check the project"),
        ("lint", "Lint the codebase"),
    ],
)
def test_script_hint_known_names(name: str, hint: str) -> None:
    assert script_hint(name, "whatever") == hint


def test_script_hint_falls_back_to_command() -> None:
    assert script_hint("db:seed", "  node scripts/seed.js  ") == "node scripts/seed.js"


def test_script_hint_truncates_long_commands() -> None:
    command = "x" * 80

    hint = script_hint("custom", command)

    assert len(hint) == 60
    assert hint.endswith("...")


def test_detect_flags_finds_docker_ci_and_env_example() -> None:
    entries = [
        TreeEntry("Dockerfile.prod"),
        TreeEntry(".github/workflows/ci.yml"),
        TreeEntry("config/.env.sample"),
        TreeEntry("src/index.ts"),
    ]

    flags = detect_flags(entries)

    assert flags.has_docker
    assert flags.has_ci
    assert flags.has_env_example
    assert "src/index.ts" in flags.paths


def test_detect_flags_defaults_to_false() -> None:
    flags = detect_flags([TreeEntry("docker-compose.yml"), TreeEntry(".github/CODEOWNERS")])

    assert not flags.has_docker
    assert not flags.has_ci
    assert not flags.has_env_example


def test_find_env_example_prefers_shallowest_path() -> None:
    assert find_env_example(["apps/web/.env.example", ".env.template"]) == ".env.template"
    assert find_env_example([]) == ".env.example"


def test_summarize_languages_orders_by_share() -> None:
    summary = summarize_languages({"CSS": 100, "TypeScript": 900, "HTML": 0, "Shell": True})

    assert summary.percentages == (("TypeScript", 90.0), ("CSS", 10.0))
    assert summary.top(1) == ["TypeScript"]


def test_summarize_languages_handles_empty_histogram() -> None:
    summary = summarize_languages({})

    assert not summary
    assert summary.top() == []
