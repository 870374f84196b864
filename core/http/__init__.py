"""HTTP request execution: query assembly, throttling, transport, and retries."""

from core.http.classifier import (
    Classification,
    FailureCause,
    FailureKind,
    Permanent,
    Success,
    Transient,
    classify,
)
from core.http.query import assemble_query, serialize_value
from core.http.rate_limit import ALL_APIS, RateBudget, RateLimiter
from core.http.request import (
    HttpFailure,
    HttpSuccess,
    RawOutcome,
    TransportFailure,
    fetch_raw,
)
from core.http.retry import (
    AttemptEvent,
    RetryPolicy,
    RetryResult,
    execute_with_retry,
)
from core.http.session import close_session, create_session

__all__ = [
    "ALL_APIS",
    "AttemptEvent",
    "Classification",
    "FailureCause",
    "FailureKind",
    "HttpFailure",
    "HttpSuccess",
    "Permanent",
    "RateBudget",
    "RateLimiter",
    "RawOutcome",
    "RetryPolicy",
    "RetryResult",
    "Success",
    "Transient",
    "TransportFailure",
    "assemble_query",
    "classify",
    "close_session",
    "create_session",
    "execute_with_retry",
    "fetch_raw",
    "serialize_value",
]
