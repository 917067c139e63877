"""Client for OpenAI-compatible chat-completion endpoints."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Callable, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ..errors import UpstreamError

PROVIDER_NAME = "OpenAI"


@dataclass
class LLMRequest:
    """Represents one chat-completion request."""

    prompt: str
    system: Optional[str]
    model: str
    base_url: str
    api_key: str
    temperature: Optional[float]
    top_p: Optional[float]
    max_tokens: Optional[int]
    json_mode: bool
    request_timeout: Optional[float]


class CompletionClient:
    """Sends a single prompt to ``<base_url>/chat/completions`` and returns the text."""

    DEFAULT_BASE_URL = "https://api.openai.com/v1"
    DEFAULT_MODEL = "gpt-4o-mini"

    def __init__(
        self,
        api_key: str,
        *,
        model: str | None = None,
        base_url: str | None = None,
        temperature: Optional[float] = 0.2,
        top_p: Optional[float] = 0.9,
        max_tokens: Optional[int] = 1400,
        json_mode: bool = True,
        request_timeout: Optional[float] = None,
        runner: Callable[[LLMRequest], str] | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model or self.DEFAULT_MODEL
        self.base_url = self._normalize_base_url(base_url or self.DEFAULT_BASE_URL)
        self.temperature = temperature
        self.top_p = top_p
        self.max_tokens = max_tokens
        self.json_mode = json_mode
        self.request_timeout = request_timeout
        self._runner = runner or self._http_runner

    def run(self, prompt: str, *, system: str | None = None) -> str:
        """Send the prompt and return the completion text, stripped."""
        request = LLMRequest(
            prompt=prompt,
            system=system,
            model=self.model,
            base_url=self.base_url,
            api_key=self.api_key,
            temperature=self.temperature,
            top_p=self.top_p,
            max_tokens=self.max_tokens,
            json_mode=self.json_mode,
            request_timeout=self.request_timeout,
        )
        return self._runner(request)

    @staticmethod
    def _normalize_base_url(url: str) -> str:
        return url.rstrip("/")

    @staticmethod
    def _http_runner(request: LLMRequest) -> str:
        endpoint = f"{request.base_url}/chat/completions"
        payload: dict[str, object] = {
            "model": request.model,
            "messages": CompletionClient._build_messages(request.system, request.prompt),
        }
        if request.temperature is not None:
            payload["temperature"] = request.temperature
        if request.top_p is not None:
            payload["top_p"] = request.top_p
        if request.max_tokens is not None:
            payload["max_tokens"] = request.max_tokens
        if request.json_mode:
            payload["response_format"] = {"type": "json_object"}

        data = json.dumps(payload).encode("utf-8")
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {request.api_key}",
        }
        http_request = Request(endpoint, data=data, headers=headers, method="POST")

        # No explicit timeout: the transport default applies.
        kwargs: dict[str, float] = {}
        if request.request_timeout is not None:
            kwargs["timeout"] = request.request_timeout

        try:
            with urlopen(http_request, **kwargs) as response:  # type: ignore[arg-type]
                raw = response.read()
        except HTTPError as exc:
            raise UpstreamError(PROVIDER_NAME, exc.code, _read_error_body(exc)) from exc
        except URLError as exc:
            raise UpstreamError(PROVIDER_NAME, None, str(exc.reason)) from exc

        try:
            response_payload = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise UpstreamError(PROVIDER_NAME, None, "response was not valid JSON") from exc

        return CompletionClient._extract_content(response_payload).strip()

    @staticmethod
    def _build_messages(system: str | None, prompt: str) -> list[dict[str, str]]:
        messages: list[dict[str, str]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        return messages

    @staticmethod
    def _extract_content(payload: object) -> str:
        if not isinstance(payload, dict):
            return ""
        choices = payload.get("choices")
        if not isinstance(choices, list) or not choices:
            return ""
        first = choices[0]
        if not isinstance(first, dict):
            return ""
        message = first.get("message")
        if isinstance(message, dict):
            content = message.get("content")
            if isinstance(content, str):
                return content
        text = first.get("text")
        if isinstance(text, str):
            return text
        return ""


def _read_error_body(exc: HTTPError) -> str:
    try:
        body = exc.read()
    except OSError:
        return "<unreadable>"
    if not body:
        return str(exc.reason or "")
    return body.decode("utf-8", errors="replace")


__all__ = ["CompletionClient", "LLMRequest", "PROVIDER_NAME"]
