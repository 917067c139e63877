"""Error taxonomy shared by the generation pipeline and the relay."""

from __future__ import annotations

RATE_LIMIT_MESSAGE = "Rate limit reached. Try again later or add a GitHub token."


class ReadmeGenError(RuntimeError):
    """Base class for all readmegen failures."""


class InvalidInputError(ReadmeGenError):
    """Raised when caller input is rejected before any network call."""


class InvalidRepositoryURL(InvalidInputError):
    """Raised when a repository URL is not a recognised GitHub form."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Not a valid GitHub repository URL: {url!r}")
        self.url = url


class UpstreamError(ReadmeGenError):
    """Raised when GitHub, the relay or the LLM provider returns a failure."""

    def __init__(self, source: str, status: int | None, body: str = "") -> None:
        self.source = source
        self.status = status
        self.body = body
        detail = body.strip()
        if status is None:
            message = f"{source} request failed"
        else:
            message = f"{source} error {status}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)

    @property
    def rate_limited(self) -> bool:
        return self.status == 403

    def user_message(self) -> str:
        """Return the short message shown to end users."""
        if self.rate_limited:
            return RATE_LIMIT_MESSAGE
        return str(self)


class MalformedUpstreamData(ReadmeGenError):
    """Raised internally when upstream content cannot be decoded."""


class ConfigError(ReadmeGenError):
    """Raised when configuration is missing or cannot be parsed."""


__all__ = [
    "ConfigError",
    "InvalidInputError",
    "InvalidRepositoryURL",
    "MalformedUpstreamData",
    "RATE_LIMIT_MESSAGE",
    "ReadmeGenError",
    "UpstreamError",
]
