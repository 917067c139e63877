"""Framework-independent request handling for the LLM relay."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..config import ENV_LLM_API_KEY, RelaySettings
from ..errors import UpstreamError
from ..llm.runner import CompletionClient
from ..llm.sections import extract_sections
from ..logging import get_logger
from ..models import RelayPayload
from ..prompting.builder import PromptBuilder

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Vary": "Origin",
}

logger = get_logger("relay")


class RelayRequest(BaseModel):
    """Validated relay request body."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    owner: Optional[str] = None
    repo: Optional[str] = None
    description: Optional[str] = None
    languages: List[str] = Field(default_factory=list)
    dependencies: List[str] = Field(default_factory=list)
    scripts: Dict[str, str] = Field(default_factory=dict)
    file_tree: Optional[str] = Field(default=None, alias="fileTree")

    def to_payload(self) -> RelayPayload:
        return RelayPayload(
            owner=(self.owner or "").strip(),
            repo=(self.repo or "").strip(),
            description=self.description,
            languages=list(self.languages),
            dependencies=list(self.dependencies),
            scripts=dict(self.scripts),
            file_tree=self.file_tree,
        )


@dataclass
class RelayResult:
    """Status code and JSON body for one relay invocation."""

    status: int
    body: Dict[str, Any]


def error_result(message: str, status: int) -> RelayResult:
    return RelayResult(status=status, body={"error": message})


ClientFactory = Callable[[RelaySettings], CompletionClient]


def default_client_factory(settings: RelaySettings) -> CompletionClient:
    return CompletionClient(
        settings.api_key or "",
        model=settings.model,
        base_url=settings.base_url,
    )


class RelayHandler:
    """Turns a raw POST body into a relay result; never raises."""

    def __init__(
        self,
        settings_loader: Callable[[], RelaySettings] = RelaySettings.from_env,
        client_factory: ClientFactory = default_client_factory,
        prompt_builder: PromptBuilder | None = None,
    ) -> None:
        self._settings_loader = settings_loader
        self._client_factory = client_factory
        self.prompt_builder = prompt_builder or PromptBuilder()

    def handle(self, raw_body: bytes) -> RelayResult:
        try:
            return self._handle(raw_body)
        except Exception as exc:  # noqa: BLE001 - every failure becomes a JSON error
            logger.exception("Relay request failed unexpectedly")
            return error_result(str(exc) or "Unknown error", 500)

    def _handle(self, raw_body: bytes) -> RelayResult:
        # Read per request; the provider key may rotate.
        settings = self._settings_loader()
        if not settings.api_key:
            return error_result(
                f"Missing {ENV_LLM_API_KEY}. Add it as a secret for this relay.", 500
            )

        try:
            data = json.loads(raw_body.decode("utf-8") if raw_body else "")
        except (UnicodeDecodeError, json.JSONDecodeError):
            return error_result("Invalid JSON body", 400)
        if not isinstance(data, dict):
            return error_result("Invalid JSON body", 400)

        try:
            request = RelayRequest.model_validate(data)
        except ValidationError as exc:
            fields = ", ".join(".".join(str(part) for part in error["loc"]) for error in exc.errors())
            return error_result(f"Invalid request body: {fields}", 400)

        payload = request.to_payload()
        if not payload.owner or not payload.repo:
            return error_result("owner and repo are required", 400)

        prompt = self.prompt_builder.build(payload)
        client = self._client_factory(settings)
        logger.info("Requesting README sections for %s/%s from %s", payload.owner, payload.repo, settings.model)
        try:
            content = client.run(prompt, system=PromptBuilder.SYSTEM_PROMPT)
        except UpstreamError as exc:
            logger.warning("Provider call failed: %s", exc)
            return error_result(str(exc), 500)

        sections = extract_sections(content)
        return RelayResult(
            status=200,
            body={"success": True, "sections": sections.to_dict(), "raw": content},
        )


__all__ = [
    "CORS_HEADERS",
    "RelayHandler",
    "RelayRequest",
    "RelayResult",
    "default_client_factory",
    "error_result",
]
