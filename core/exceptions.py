"""
Centralized exception hierarchy for the Google Maps client.

Every failure that crosses the client boundary is one of these types, so
callers never have to catch raw aiohttp or JSON errors.
"""

from __future__ import annotations

from typing import Any


class MapsError(Exception):
    """Base exception for all client-specific errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(MapsError):
    """Exception raised when request parameters or configuration are invalid."""


class QueryNotBuiltError(MapsError):
    """Exception raised when a request is executed before its query is built."""

    def __init__(self, service: str) -> None:
        super().__init__(
            f"{service} query string not built; call build() before get()",
            {"service": service},
        )


class MapsRequestError(MapsError):
    """
    Terminal failure of a request after classification and retries.

    ``retryable`` is true when the cause was transient and the retry budget
    ran out; the service's own status and message are preserved verbatim.
    """

    @property
    def status(self) -> int | None:
        return self.details.get("status")

    @property
    def service_status(self) -> str | None:
        return self.details.get("service_status")

    @property
    def service_message(self) -> str | None:
        return self.details.get("service_message")

    @property
    def retryable(self) -> bool:
        return bool(self.details.get("retryable", False))

    @property
    def attempts(self) -> int:
        return int(self.details.get("attempts", 0))

    @property
    def cause(self) -> Any:
        return self.details.get("cause")


ValidationException = ValidationError
