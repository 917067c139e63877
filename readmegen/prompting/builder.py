"""Builds the completion prompt sent by the relay."""

from __future__ import annotations

from pathlib import Path
from typing import List

from jinja2 import Environment, FileSystemLoader

from ..models import RelayPayload

_TEMPLATE_NAME = "relay_prompt.j2"


class PromptBuilder:
    """Renders the four-section README prompt from a relay payload."""

    SYSTEM_PROMPT = (
        "You write excellent README sections. Be precise, actionable, and developer-friendly."
    )

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self._env = self._create_env(self.templates_dir)

    def build(self, payload: RelayPayload) -> str:
        template = self._env.get_template(_TEMPLATE_NAME)
        return template.render(
            owner=payload.owner,
            repo=payload.repo,
            description=(payload.description or "").strip(),
            languages=self._clean(payload.languages),
            dependencies=self._clean(payload.dependencies),
            scripts=", ".join(f"{name}={command}" for name, command in payload.scripts.items()),
            file_tree=(payload.file_tree or "").rstrip(),
        ).strip()

    @staticmethod
    def _clean(values: List[str]) -> List[str]:
        return [value for value in values if value]

    def _create_env(self, templates_dir: Path) -> Environment:
        directories = [str(templates_dir)]
        default_dir = str(Path(__file__).with_name("templates"))
        if default_dir not in directories:
            directories.append(default_dir)
        loader = FileSystemLoader(directories)
        return Environment(loader=loader, autoescape=False, trim_blocks=True, lstrip_blocks=True)


__all__ = ["PromptBuilder"]
