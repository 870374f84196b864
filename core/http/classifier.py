"""
Classification of raw HTTP outcomes.

Every attempt ends in exactly one of three values: :class:`Success` with the
parsed envelope, :class:`Transient` for failures worth retrying, or
:class:`Permanent` for failures retrying cannot fix. Rules, in order:

* no response at all (connection drop, timeout) -> Transient
* 2xx whose body could not be read -> Permanent
* 2xx whose envelope embeds a service error -> Permanent, even when the
  rest of the payload fails validation
* 2xx whose body does not parse -> Permanent
* 2xx with a clean envelope -> Success
* 5xx or 429 -> Transient
* any other status -> Permanent
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Generic, Protocol, Self, TypeVar

from pydantic import ValidationError

from core.http.request import HttpFailure, HttpSuccess, RawOutcome, TransportFailure


class ServiceErrorLike(Protocol):
    status: str | None
    message: str | None


class Envelope(Protocol):
    @classmethod
    def model_validate_json(cls, json_data: str | bytes) -> Self: ...

    @classmethod
    def probe_error(cls, body: str) -> ServiceErrorLike | None: ...

    def service_error(self) -> ServiceErrorLike | None: ...


EnvelopeT = TypeVar("EnvelopeT", bound=Envelope)


class FailureKind(StrEnum):
    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    MALFORMED_PAYLOAD = "malformed_payload"
    SERVICE_ERROR = "service_error"


@dataclass(frozen=True)
class FailureCause:
    kind: FailureKind
    message: str
    status: int | None = None
    service_status: str | None = None
    service_message: str | None = None
    exception: BaseException | None = None


@dataclass(frozen=True)
class Success(Generic[EnvelopeT]):
    payload: EnvelopeT


@dataclass(frozen=True)
class Transient:
    cause: FailureCause
    retry_after: float | None = None


@dataclass(frozen=True)
class Permanent:
    cause: FailureCause


Classification = Success[Any] | Transient | Permanent


def is_retryable_status(status: int) -> bool:
    """Only server errors and explicit throttling are worth retrying."""
    return 500 <= status < 600 or status == 429


def classify(
    outcome: RawOutcome,
    envelope_type: type[EnvelopeT],
    *,
    service_name: str = "Service",
) -> Success[EnvelopeT] | Transient | Permanent:
    if isinstance(outcome, TransportFailure):
        return Transient(
            FailureCause(
                FailureKind.TRANSPORT,
                f"{service_name} request failed: {outcome.cause!r}",
                exception=outcome.cause,
            ),
        )

    if isinstance(outcome, HttpSuccess):
        if outcome.read_error is not None:
            return Permanent(
                FailureCause(
                    FailureKind.MALFORMED_PAYLOAD,
                    f"{service_name} response body could not be read: "
                    f"{outcome.read_error!r}",
                    status=outcome.status,
                    exception=outcome.read_error,
                ),
            )
        try:
            envelope = envelope_type.model_validate_json(outcome.body)
        except ValidationError as e:
            # An embedded error wins even when the rest of the payload is invalid
            error = envelope_type.probe_error(outcome.body)
            if error is None:
                return Permanent(
                    FailureCause(
                        FailureKind.MALFORMED_PAYLOAD,
                        f"{service_name} returned a malformed payload: "
                        f"{e.error_count()} validation error(s)",
                        status=outcome.status,
                        exception=e,
                    ),
                )
        else:
            error = envelope.service_error()
            if error is None:
                return Success(envelope)
        return Permanent(
            FailureCause(
                FailureKind.SERVICE_ERROR,
                f"{service_name} error: {error.status}: {error.message}",
                status=outcome.status,
                service_status=error.status,
                service_message=error.message,
            ),
        )

    if not isinstance(outcome, HttpFailure):
        msg = f"Unknown outcome type: {type(outcome).__name__}"
        raise TypeError(msg)

    # The body of a failed response may still carry the service's own error
    error = envelope_type.probe_error(outcome.body) if outcome.body else None
    cause = FailureCause(
        FailureKind.HTTP_STATUS,
        f"{service_name} error: {outcome.status}",
        status=outcome.status,
        service_status=error.status if error else None,
        service_message=error.message if error else None,
    )
    if is_retryable_status(outcome.status):
        return Transient(cause, retry_after=outcome.retry_after)
    return Permanent(cause)
