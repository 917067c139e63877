"""LLM relay endpoint and the client that calls it."""

from .app import DEFAULT_PATH, create_app, run_service
from .client import RelayClient
from .handler import CORS_HEADERS, RelayHandler, RelayRequest, RelayResult

__all__ = [
    "CORS_HEADERS",
    "DEFAULT_PATH",
    "RelayClient",
    "RelayHandler",
    "RelayRequest",
    "RelayResult",
    "create_app",
    "run_service",
]
