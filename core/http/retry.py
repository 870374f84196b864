"""Retry engine for async HTTP operations.

Drives an attempt function through a bounded exponential backoff using
tenacity. Attempts return a classification instead of raising, so only
:class:`~core.http.classifier.Transient` results are retried and the last
outcome is handed back to the caller once the loop stops.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    before_sleep_log,
    retry_if_result,
    stop_after_attempt,
    stop_before_delay,
    wait_exponential_jitter,
)

from core.constants import (
    RETRY_INITIAL_INTERVAL,
    RETRY_JITTER,
    RETRY_MAX_ATTEMPTS,
    RETRY_MAX_ELAPSED,
    RETRY_MAX_INTERVAL,
    RETRY_MULTIPLIER,
)
from core.http.classifier import Classification, Permanent, Success, Transient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """Backoff limits for one request.

    Args:
        max_attempts: Total attempts, including the first one.
        initial_interval: Delay before the first retry, in seconds.
        multiplier: Growth factor applied to the delay after every retry.
        max_interval: Upper bound of a single delay, in seconds.
        jitter: Maximum random seconds added to each delay.
        max_elapsed: Stop instead of sleeping past this many seconds in total.
            ``None`` disables the time ceiling.
    """

    max_attempts: int = RETRY_MAX_ATTEMPTS
    initial_interval: float = RETRY_INITIAL_INTERVAL
    multiplier: float = RETRY_MULTIPLIER
    max_interval: float = RETRY_MAX_INTERVAL
    jitter: float = RETRY_JITTER
    max_elapsed: float | None = RETRY_MAX_ELAPSED

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            msg = "max_attempts must be at least 1"
            raise ValueError(msg)
        if self.multiplier < 1:
            msg = "multiplier must be at least 1"
            raise ValueError(msg)
        if min(self.initial_interval, self.max_interval, self.jitter) < 0:
            msg = "intervals and jitter must not be negative"
            raise ValueError(msg)


@dataclass(frozen=True)
class AttemptEvent:
    """What happened on one attempt, reported before the engine acts on it."""

    service: str
    attempt: int
    outcome: Classification
    elapsed: float

    @property
    def kind(self) -> str:
        if isinstance(self.outcome, Success):
            return "success"
        if isinstance(self.outcome, Transient):
            return "transient"
        return "permanent"


@dataclass(frozen=True)
class RetryResult:
    outcome: Classification
    attempts: int
    elapsed: float


AttemptObserver = Callable[[AttemptEvent], None]


def _is_transient(outcome: Any) -> bool:
    return isinstance(outcome, Transient)


def backoff_wait(policy: RetryPolicy) -> Callable[[RetryCallState], float]:
    """Exponential backoff with jitter, stretched to honour ``Retry-After``."""
    exponential = wait_exponential_jitter(
        initial=policy.initial_interval,
        max=policy.max_interval,
        exp_base=policy.multiplier,
        jitter=policy.jitter,
    )

    def wait(retry_state: RetryCallState) -> float:
        delay = exponential(retry_state)
        outcome = retry_state.outcome
        if outcome is not None and not outcome.failed:
            result = outcome.result()
            if isinstance(result, Transient) and result.retry_after is not None:
                delay = max(delay, min(result.retry_after, policy.max_interval))
        return delay

    return wait


def _log_attempt(event: AttemptEvent, max_attempts: int) -> None:
    outcome = event.outcome
    if isinstance(outcome, Success):
        logger.debug(
            "%s succeeded on attempt %d after %.2fs",
            event.service,
            event.attempt,
            event.elapsed,
        )
    elif isinstance(outcome, Transient):
        logger.warning(
            "%s attempt %d/%d failed with a retryable error: %s",
            event.service,
            event.attempt,
            max_attempts,
            outcome.cause.message,
        )
    elif isinstance(outcome, Permanent):
        logger.error(
            "%s attempt %d failed permanently: %s",
            event.service,
            event.attempt,
            outcome.cause.message,
        )


async def execute_with_retry(
    attempt: Callable[[], Awaitable[Classification]],
    policy: RetryPolicy | None = None,
    *,
    service_name: str = "Service",
    on_attempt: AttemptObserver | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> RetryResult:
    """Run ``attempt`` until it succeeds, fails permanently, or the policy stops.

    Returns the final outcome rather than raising, so a budget exhausted on
    transient failures comes back as the last :class:`Transient`. Exceptions
    raised by ``attempt`` itself, including cancellation, propagate unchanged.
    """
    policy = policy or RetryPolicy()
    started = time.monotonic()
    attempts = 0

    async def run_attempt() -> Classification:
        nonlocal attempts
        attempts += 1
        outcome = await attempt()
        event = AttemptEvent(
            service=service_name,
            attempt=attempts,
            outcome=outcome,
            elapsed=time.monotonic() - started,
        )
        _log_attempt(event, policy.max_attempts)
        if on_attempt is not None:
            on_attempt(event)
        return outcome

    stop = stop_after_attempt(policy.max_attempts)
    if policy.max_elapsed is not None:
        stop = stop | stop_before_delay(policy.max_elapsed)

    retrying = AsyncRetrying(
        stop=stop,
        wait=backoff_wait(policy),
        retry=retry_if_result(_is_transient),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        # Hand back the last Transient instead of raising RetryError
        retry_error_callback=lambda retry_state: retry_state.outcome.result(),
        sleep=sleep,
    )
    outcome = await retrying(run_attempt)
    return RetryResult(
        outcome=outcome,
        attempts=attempts,
        elapsed=time.monotonic() - started,
    )
