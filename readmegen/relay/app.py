"""FastAPI application hosting the README relay endpoint."""

from __future__ import annotations

import asyncio
from typing import Callable

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..logging import get_logger
from .handler import CORS_HEADERS, RelayHandler, RelayResult, error_result

DEFAULT_PATH = "/generate-readme"

_ROUTED_METHODS = ["POST", "OPTIONS"]

logger = get_logger("relay.app")


class HealthResponse(BaseModel):
    status: str


def create_app(
    handler_factory: Callable[[], RelayHandler] = RelayHandler,
    *,
    path: str = DEFAULT_PATH,
) -> FastAPI:
    """Create the FastAPI application exposing the relay endpoint."""

    app = FastAPI(title="readmegen relay", version="1.0.0")

    # Wrong-method replies keep the JSON error shape and CORS headers.
    @app.exception_handler(StarletteHTTPException)
    async def method_not_allowed(request: Request, exc: StarletteHTTPException) -> Response:
        if exc.status_code != 405:
            return await http_exception_handler(request, exc)
        response = _json(error_result("Method not allowed", 405))
        response.headers.update(exc.headers or {})
        return response

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.api_route(path, methods=_ROUTED_METHODS)
    async def relay(request: Request) -> Response:
        if request.method == "OPTIONS":
            return PlainTextResponse("ok", headers=CORS_HEADERS)

        raw_body = await request.body()
        handler = handler_factory()

        def _run() -> RelayResult:
            return handler.handle(raw_body)

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:  # pragma: no cover - fallback path when not in async context
            result = _run()
        else:
            result = await loop.run_in_executor(None, _run)
        if result.status >= 400:
            logger.info("Relay responded %s: %s", result.status, result.body.get("error"))
        return _json(result)

    return app


def _json(result: RelayResult) -> JSONResponse:
    return JSONResponse(status_code=result.status, content=result.body, headers=CORS_HEADERS)


def run_service(host: str = "0.0.0.0", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)


__all__ = ["DEFAULT_PATH", "create_app", "run_service"]
