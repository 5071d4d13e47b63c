from __future__ import annotations

import re
from typing import Any

import httpx


class RelayError(Exception):
    http_status = 500

    def __init__(self, message: str, *, service: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.service = service

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message}
        if self.service:
            payload["service"] = self.service
        return payload


class ValidationError(RelayError):
    """Malformed client input."""

    http_status = 400


class ConfigurationError(RelayError):
    """The relay cannot serve the request as configured (missing key, unknown provider)."""


class UnsupportedProviderError(ConfigurationError):
    def __init__(self, service: str) -> None:
        super().__init__(f"Unsupported AI service: {service}", service=service)


class ProviderError(RelayError):
    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"Failed to call {provider}: {message}", service=provider)
        self.provider = provider
        self.detail = message


def _compact_message(message: str, max_len: int = 220) -> str:
    msg = re.sub(r"\s+", " ", message)
    return msg.strip()[:max_len]


def describe_failure(exc: Exception) -> str:
    """Best-effort caller-facing message; never includes request URLs."""
    if isinstance(exc, httpx.HTTPStatusError):
        return f"Request failed with status code {exc.response.status_code}"
    if isinstance(exc, httpx.RequestError):
        return _compact_message(str(exc)) or exc.__class__.__name__
    msg = _compact_message(str(exc))
    return msg or exc.__class__.__name__


def failure_diagnostics(exc: Exception) -> dict[str, Any]:
    out: dict[str, Any] = {"error_type": exc.__class__.__name__, "error_message": describe_failure(exc)}
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        # query strings can carry credentials (google passes its key there)
        out["url"] = str(exc.request.url.copy_with(query=None))
        out["status_code"] = response.status_code
        try:
            out["response_body"] = response.json()
        except ValueError:
            out["response_body"] = response.text
    return out
