"""
Single-attempt HTTP GET execution.

``fetch_raw`` performs exactly one request and reports what happened as a
:data:`RawOutcome` value. It never retries and never raises for network or
HTTP failures; the retry engine decides what to do with the outcome.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import Any

import aiohttp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpSuccess:
    """A 2xx response and its body text.

    ``read_error`` is set when the status arrived but the body could not be
    read; ``body`` is then empty.
    """

    status: int
    body: str
    read_error: BaseException | None = None


@dataclass(frozen=True)
class HttpFailure:
    """A non-2xx response."""

    status: int
    reason: str | None = None
    retry_after: float | None = None
    body: str | None = None


@dataclass(frozen=True)
class TransportFailure:
    """No response reached us: connection, timeout, or request construction error."""

    cause: BaseException


RawOutcome = HttpSuccess | HttpFailure | TransportFailure


def parse_retry_after(value: str | None) -> float | None:
    """Parse a Retry-After header given either as seconds or an HTTP date."""
    if not value:
        return None
    value = value.strip()
    try:
        return max(0.0, float(value))
    except ValueError:
        pass
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=UTC)
    return max(0.0, (when - datetime.now(UTC)).total_seconds())


async def _read_body(response: Any) -> tuple[str | None, BaseException | None]:
    """Read and decode the body, reporting a failed read instead of raising."""
    try:
        raw = await response.read()
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        return None, e
    # Undecodable bytes surface later as a malformed payload
    return raw.decode("utf-8", errors="replace"), None


async def fetch_raw(
    session: Any,
    url: str,
    *,
    timeout: aiohttp.ClientTimeout | None = None,
) -> RawOutcome:
    request_kwargs: dict[str, Any] = {}
    if timeout is not None:
        request_kwargs["timeout"] = timeout

    try:
        async with session.get(url, **request_kwargs) as response:
            # The status has arrived; a failed body read must not hide it
            body, read_error = await _read_body(response)
            if read_error is not None:
                logger.debug(
                    "Reading the %d response body failed: %r",
                    response.status,
                    read_error,
                )
            if 200 <= response.status < 300:
                return HttpSuccess(
                    status=response.status,
                    body=body or "",
                    read_error=read_error,
                )
            return HttpFailure(
                status=response.status,
                reason=getattr(response, "reason", None),
                retry_after=parse_retry_after(response.headers.get("Retry-After")),
                body=body or None,
            )
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        # The query is left out because it carries the API key
        logger.debug("GET %s failed before a response: %r", url.split("?", 1)[0], e)
        return TransportFailure(cause=e)
