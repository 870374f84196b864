import asyncio

import aiohttp
import pytest

from core.http.request import (
    HttpFailure,
    HttpSuccess,
    TransportFailure,
    fetch_raw,
    parse_retry_after,
)
from tests.http_fakes import FakeResponse, FakeSession


@pytest.mark.asyncio
async def test_fetch_raw_returns_body_on_success() -> None:
    session = FakeSession(get_responses=[FakeResponse(status=200, text_data='{"a": 1}')])

    outcome = await fetch_raw(session, "https://example.test/json?x=1")

    assert outcome == HttpSuccess(status=200, body='{"a": 1}')
    assert session.requests == [("GET", "https://example.test/json?x=1", {})]


@pytest.mark.asyncio
async def test_fetch_raw_reports_http_failure_with_retry_after() -> None:
    response = FakeResponse(
        status=429,
        text_data="slow down",
        headers={"Retry-After": "7"},
        reason="Too Many Requests",
    )
    session = FakeSession(get_responses=[response])

    outcome = await fetch_raw(session, "https://example.test")

    assert isinstance(outcome, HttpFailure)
    assert outcome.status == 429
    assert outcome.retry_after == 7.0
    assert outcome.reason == "Too Many Requests"
    assert outcome.body == "slow down"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        aiohttp.ClientConnectionError("connection reset"),
        aiohttp.InvalidURL("not a url"),
        asyncio.TimeoutError(),
    ],
)
async def test_fetch_raw_wraps_transport_errors(error: BaseException) -> None:
    session = FakeSession(get_responses=[error])

    outcome = await fetch_raw(session, "https://example.test")

    assert isinstance(outcome, TransportFailure)
    assert outcome.cause is error


@pytest.mark.asyncio
async def test_unreadable_error_body_keeps_the_status() -> None:
    response = FakeResponse(
        status=400,
        read_error=aiohttp.ClientPayloadError("truncated"),
    )
    session = FakeSession(get_responses=[response])

    outcome = await fetch_raw(session, "https://example.test")

    assert outcome == HttpFailure(status=400, body=None)


@pytest.mark.asyncio
async def test_unreadable_success_body_is_reported_with_the_status() -> None:
    error = aiohttp.ClientPayloadError("truncated")
    session = FakeSession(get_responses=[FakeResponse(status=200, read_error=error)])

    outcome = await fetch_raw(session, "https://example.test")

    assert isinstance(outcome, HttpSuccess)
    assert outcome.status == 200
    assert outcome.body == ""
    assert outcome.read_error is error


@pytest.mark.asyncio
async def test_fetch_raw_does_not_retry() -> None:
    session = FakeSession(
        get_responses=[FakeResponse(status=503), FakeResponse(status=200)],
    )

    outcome = await fetch_raw(session, "https://example.test")

    assert isinstance(outcome, HttpFailure)
    assert len(session.requests) == 1


def test_parse_retry_after_variants() -> None:
    assert parse_retry_after(None) is None
    assert parse_retry_after("") is None
    assert parse_retry_after("2.5") == 2.5
    assert parse_retry_after("-3") == 0.0
    assert parse_retry_after("Wed, 21 Oct 2015 07:28:00 GMT") == 0.0
    assert parse_retry_after("soon") is None
