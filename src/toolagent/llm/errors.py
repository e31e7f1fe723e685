"""Errors raised by completion clients.

Everything here derives from LLMClientError, itself a ToolAgentError. The
agent loop lets these through untouched. Errors mapped from an HTTP
response keep its status code.
"""

from __future__ import annotations

from toolagent.exceptions import ToolAgentError


class LLMClientError(ToolAgentError):
    """Base class for provider and transport failures.

    Attributes:
        status_code: HTTP status that caused the error, if any.
    """

    def __init__(self, message: str = "", *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class LLMConfigError(LLMClientError):
    """Client settings are missing or invalid (no API key, bad timeout)."""


class LLMRateLimitError(LLMClientError):
    """HTTP 429. ``retry_after`` is the Retry-After header in seconds, if sent."""

    def __init__(self, message: str = "Rate limited", retry_after: float | None = None) -> None:
        self.retry_after = retry_after
        suffix = "" if retry_after is None else f" (retry after {retry_after}s)"
        super().__init__(message + suffix, status_code=429)


class LLMAuthError(LLMClientError):
    """HTTP 401/403: the API key was rejected."""


class LLMResponseError(LLMClientError):
    """A completion response did not have the expected shape."""


class LLMStreamError(LLMClientError):
    """The provider reported an error, or sent garbage, mid-stream."""
