"""Package manager, tech stack and script heuristics for Node manifests."""

from __future__ import annotations

import re
from typing import Iterable, List, Pattern, Sequence, Tuple, Union

_LOCKFILES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("pnpm-lock.yaml",), "pnpm"),
    (("yarn.lock",), "yarn"),
    (("bun.lockb", "bun.lock"), "bun"),
)

_Matcher = Union[str, Pattern[str]]

# Declaration order is output order.
_TECH_TABLE: Tuple[Tuple[_Matcher, str], ...] = (
    ("react", "React"),
    ("next", "Next.js"),
    ("vue", "Vue"),
    ("nuxt", "Nuxt"),
    (re.compile(r"^svelte$|^@sveltejs/"), "Svelte"),
    (re.compile(r"^@angular/core$"), "Angular"),
    ("vite", "Vite"),
    ("typescript", "TypeScript"),
    ("tailwindcss", "Tailwind CSS"),
    (re.compile(r"^@radix-ui/"), "shadcn/ui + Radix UI"),
    ("express", "Express"),
    (re.compile(r"^@nestjs/"), "NestJS"),
    ("fastify", "Fastify"),
    (re.compile(r"^(@prisma/client|prisma)$"), "Prisma"),
    (re.compile(r"^@supabase/"), "Supabase"),
    (re.compile(r"^firebase(-admin)?$"), "Firebase"),
    (re.compile(r"^(redux|@reduxjs/toolkit)$"), "Redux"),
    (re.compile(r"^@tanstack/react-query$|^react-query$"), "React Query"),
    (re.compile(r"^react-router(-dom)?$"), "React Router"),
    ("zod", "Zod"),
    ("jest", "Jest"),
    ("vitest", "Vitest"),
    (re.compile(r"^@?playwright(/test)?$"), "Playwright"),
    ("cypress", "Cypress"),
    ("eslint", "ESLint"),
    ("prettier", "Prettier"),
    (re.compile(r"^@storybook/|^storybook$"), "Storybook"),
)

_SCRIPT_HINTS: Tuple[Tuple[Pattern[str], str], ...] = (
    (re.compile(r"^dev$"), "Start the development server"),
    (re.compile(r"^start$"), "Start the application"),
    (re.compile(r"^build$"), "Build for production"),
    (re.compile(r"^preview$"), "Preview the production build locally"),
    (re.compile(r"^test(:.*)?$"), "Run the test suite"),
    (re.compile(r"^lint$"), "Lint the codebase"),
    (re.compile(r"^format$"), "Format the codebase"),
    (re.compile(r"^(typecheck|type-check|tsc)$"), "Type-check the project"),
    (re.compile(r"^deploy$"), "Deploy the application"),
    (re.compile(r"^serve$"), "Serve the built application"),
)

_HINT_MAX_CHARS = 60


def infer_package_manager(paths: Iterable[str]) -> str:
    """Return pnpm, yarn, bun or npm based on root lockfiles."""
    present = set(paths)
    for names, manager in _LOCKFILES:
        if any(name in present for name in names):
            return manager
    return "npm"


def infer_tech_stack(dependency_names: Iterable[str]) -> List[str]:
    """Return recognised technology labels in table order, without duplicates."""
    names: Sequence[str] = list(dependency_names)
    stack: List[str] = []
    for matcher, label in _TECH_TABLE:
        if label in stack:
            continue
        if any(_matches(matcher, name) for name in names):
            stack.append(label)
    return stack


def script_hint(name: str, command: str) -> str:
    """Describe what an npm script does."""
    for pattern, hint in _SCRIPT_HINTS:
        if pattern.match(name):
            return hint
    command = command.strip()
    if len(command) > _HINT_MAX_CHARS:
        return command[: _HINT_MAX_CHARS - 3] + "..."
    return command


def _matches(matcher: _Matcher, name: str) -> bool:
    if isinstance(matcher, str):
        return matcher == name
    return matcher.search(name) is not None


__all__ = ["infer_package_manager", "infer_tech_stack", "script_hint"]
