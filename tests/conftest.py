from __future__ import annotations

import base64
import json
from typing import Any, Callable, Dict, List, Tuple

import httpx
import pytest

Routes = Dict[str, Tuple[int, Any]]


class FakeGitHub:
    """httpx transport answering GitHub REST paths from a route table."""

    def __init__(self, routes: Routes) -> None:
        self.routes = routes
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.routes.get(request.url.path, (404, {"message": "Not Found"}))
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def paths(self) -> List[str]:
        return [request.url.path for request in self.requests]


def _encode_manifest(data: Dict[str, Any]) -> str:
    raw = base64.b64encode(json.dumps(data).encode("utf-8")).decode("ascii")
    # The contents API wraps base64 at 60 columns.
    return "\n".join(raw[index : index + 60] for index in range(0, len(raw), 60))


@pytest.fixture
def widget_routes() -> Routes:
    """Bare acme/widget repository: no languages, topics, manifest or tree."""
    return {
        "/repos/acme/widget": (
            200,
            {"name": "widget", "default_branch": "main", "license": None, "description": None},
        ),
        "/repos/acme/widget/languages": (200, {}),
        "/repos/acme/widget/topics": (200, {"names": []}),
    }


@pytest.fixture
def fake_github() -> Callable[[Routes], FakeGitHub]:
    return FakeGitHub


@pytest.fixture
def encode_manifest() -> Callable[[Dict[str, Any]], str]:
    return _encode_manifest
