import asyncio

import pytest

from core.http.classifier import FailureCause, FailureKind, Permanent, Success, Transient
from core.http.retry import AttemptEvent, RetryPolicy, backoff_wait, execute_with_retry

TRANSIENT = Transient(FailureCause(FailureKind.HTTP_STATUS, "boom", status=500))
PERMANENT = Permanent(FailureCause(FailureKind.HTTP_STATUS, "bad request", status=400))


def _sequence(*outcomes):
    queue = list(outcomes)
    calls = 0

    async def attempt():
        nonlocal calls
        calls += 1
        return queue.pop(0)

    def count() -> int:
        return calls

    return attempt, count


@pytest.mark.asyncio
async def test_retries_transient_until_success(fast_retry: RetryPolicy) -> None:
    attempt, count = _sequence(TRANSIENT, TRANSIENT, TRANSIENT, Success("ok"))

    result = await execute_with_retry(attempt, fast_retry)

    assert result.outcome == Success("ok")
    assert result.attempts == 4
    assert count() == 4


@pytest.mark.asyncio
async def test_permanent_stops_immediately(fast_retry: RetryPolicy) -> None:
    attempt, count = _sequence(PERMANENT, Success("never"))

    result = await execute_with_retry(attempt, fast_retry)

    assert result.outcome is PERMANENT
    assert count() == 1


@pytest.mark.asyncio
async def test_returns_last_transient_after_exhaustion() -> None:
    policy = RetryPolicy(max_attempts=2, initial_interval=0, jitter=0, max_elapsed=None)
    last = Transient(FailureCause(FailureKind.TRANSPORT, "second"))
    attempt, count = _sequence(TRANSIENT, last, Success("never"))

    result = await execute_with_retry(attempt, policy)

    assert result.outcome is last
    assert result.attempts == 2
    assert count() == 2


@pytest.mark.asyncio
async def test_stops_before_sleeping_past_max_elapsed() -> None:
    policy = RetryPolicy(max_attempts=10, initial_interval=5, jitter=0, max_elapsed=1)
    sleeps: list[float] = []

    async def fake_sleep(delay: float) -> None:
        sleeps.append(delay)

    attempt, count = _sequence(TRANSIENT, Success("never"))

    result = await execute_with_retry(attempt, policy, sleep=fake_sleep)

    assert result.outcome is TRANSIENT
    assert count() == 1
    assert sleeps == []


@pytest.mark.asyncio
async def test_backoff_delays_grow_and_are_capped() -> None:
    policy = RetryPolicy(
        max_attempts=6,
        initial_interval=1,
        multiplier=2,
        max_interval=5,
        jitter=0,
        max_elapsed=None,
    )
    sleeps: list[float] = []

    async def fake_sleep(delay: float) -> None:
        sleeps.append(delay)

    attempt, _ = _sequence(*[TRANSIENT] * 6)

    await execute_with_retry(attempt, policy, sleep=fake_sleep)

    assert sleeps == [1, 2, 4, 5, 5]


@pytest.mark.asyncio
async def test_retry_after_stretches_the_delay() -> None:
    policy = RetryPolicy(max_attempts=2, initial_interval=0.1, jitter=0, max_elapsed=None)
    sleeps: list[float] = []

    async def fake_sleep(delay: float) -> None:
        sleeps.append(delay)

    throttled = Transient(FailureCause(FailureKind.HTTP_STATUS, "429", status=429), retry_after=3)
    attempt, _ = _sequence(throttled, Success("ok"))

    await execute_with_retry(attempt, policy, sleep=fake_sleep)

    assert sleeps == [3]


@pytest.mark.asyncio
async def test_on_attempt_sees_every_attempt(fast_retry: RetryPolicy) -> None:
    events: list[AttemptEvent] = []
    attempt, _ = _sequence(TRANSIENT, PERMANENT)

    await execute_with_retry(
        attempt,
        fast_retry,
        service_name="Roads",
        on_attempt=events.append,
    )

    assert [event.kind for event in events] == ["transient", "permanent"]
    assert [event.attempt for event in events] == [1, 2]
    assert {event.service for event in events} == {"Roads"}


@pytest.mark.asyncio
async def test_cancellation_during_backoff_stops_attempts() -> None:
    policy = RetryPolicy(max_attempts=5, initial_interval=30, jitter=0, max_elapsed=None)
    attempt, count = _sequence(*[TRANSIENT] * 5)

    task = asyncio.create_task(execute_with_retry(attempt, policy))
    await asyncio.sleep(0.05)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
    assert count() == 1


@pytest.mark.asyncio
async def test_unexpected_exceptions_propagate(fast_retry: RetryPolicy) -> None:
    async def attempt():
        raise RuntimeError("bug")

    with pytest.raises(RuntimeError, match="bug"):
        await execute_with_retry(attempt, fast_retry)


def test_policy_rejects_invalid_limits() -> None:
    with pytest.raises(ValueError):
        RetryPolicy(max_attempts=0)
    with pytest.raises(ValueError):
        RetryPolicy(multiplier=0.5)


def test_backoff_wait_is_bounded_with_jitter() -> None:
    policy = RetryPolicy(initial_interval=1, multiplier=2, max_interval=4, jitter=0.5)
    wait = backoff_wait(policy)

    class _State:
        attempt_number = 10
        outcome = None

    assert wait(_State()) <= 4
