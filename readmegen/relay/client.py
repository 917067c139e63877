"""Async client used by the generator to call a deployed relay."""

from __future__ import annotations

from typing import Any, Dict

import httpx

from ..errors import UpstreamError
from ..logging import get_logger
from ..models import AiSections, RelayPayload

RELAY_SOURCE = "Relay"

logger = get_logger("relay.client")


class RelayClient:
    """Posts a relay payload and returns the normalized AI sections."""

    def __init__(
        self,
        url: str,
        api_key: str | None = None,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    async def enhance(self, payload: RelayPayload) -> AiSections:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.post(self.url, json=payload.to_json(), headers=self._headers())
            except httpx.HTTPError as exc:
                raise UpstreamError(RELAY_SOURCE, None, str(exc)) from exc

        body = _json_or_none(response)
        if not response.is_success:
            detail = body.get("error") if isinstance(body, dict) else None
            raise UpstreamError(RELAY_SOURCE, response.status_code, str(detail or response.text))
        if not isinstance(body, dict):
            raise UpstreamError(RELAY_SOURCE, response.status_code, "response is not a JSON object")
        if body.get("error"):
            raise UpstreamError(RELAY_SOURCE, response.status_code, str(body["error"]))

        sections = AiSections.from_mapping(body.get("sections"))
        logger.debug("Relay returned sections: %s", ", ".join(sections.to_dict()) or "none")
        return sections

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["apikey"] = self.api_key
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


__all__ = ["RelayClient"]
