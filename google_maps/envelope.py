"""
Response envelopes shared by every endpoint.

Google embeds errors in two shapes. The Roads API nests an ``error`` object
(``code``, ``status``, ``message``); the older JSON web services such as
Directions and Geocoding use a top-level ``status`` with an optional
``error_message``. Either way, an embedded error takes precedence over the
rest of the payload.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, ValidationError


class ServiceError(BaseModel):
    model_config = ConfigDict(extra="allow")

    code: int | None = None
    status: str | None = None
    message: str | None = None

    def is_empty(self) -> bool:
        return self.code is None and self.status is None and self.message is None

    def __str__(self) -> str:
        return f"{self.status or self.code}: {self.message or ''}".rstrip(": ")


class ServiceEnvelope(BaseModel):
    """Payload wrapper carrying an optional embedded ``error`` object."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    error: ServiceError | None = None

    def service_error(self) -> ServiceError | None:
        if self.error is None or self.error.is_empty():
            return None
        return self.error

    @classmethod
    def probe_error(cls, body: str) -> ServiceError | None:
        """Read only the error fields of ``body``, ignoring the payload."""
        probe = cls._error_probe()
        try:
            return probe.model_validate_json(body).service_error()
        except ValidationError:
            return None

    @classmethod
    def _error_probe(cls) -> type[ServiceEnvelope]:
        return ServiceEnvelope


class StatusEnvelope(ServiceEnvelope):
    """Envelope of the services that report errors through ``status``."""

    OK_STATUSES: ClassVar[frozenset[str]] = frozenset({"OK", "ZERO_RESULTS"})

    status: str | None = None
    error_message: str | None = None

    def service_error(self) -> ServiceError | None:
        embedded = super().service_error()
        if embedded is not None:
            return embedded
        if self.status is None or self.status in self.OK_STATUSES:
            return None
        return ServiceError(status=self.status, message=self.error_message)

    @property
    def zero_results(self) -> bool:
        return self.status == "ZERO_RESULTS"

    @classmethod
    def _error_probe(cls) -> type[ServiceEnvelope]:
        return StatusEnvelope
