"""HTTP session management for aiohttp.

Each client owns its session; this module only centralizes how sessions are
configured.
"""

from __future__ import annotations

import logging

import aiohttp

from core.constants import (
    HTTP_CONNECTION_LIMIT,
    HTTP_TIMEOUT_CONNECT,
    HTTP_TIMEOUT_SOCK_READ,
    HTTP_TIMEOUT_TOTAL,
    HTTP_USER_AGENT,
)

logger = logging.getLogger(__name__)


def create_session(
    *,
    total_timeout: float = HTTP_TIMEOUT_TOTAL,
    connection_limit: int = HTTP_CONNECTION_LIMIT,
) -> aiohttp.ClientSession:
    """Create an aiohttp ClientSession with the client's default settings.

    Must be called from within a running event loop.
    """
    timeout = aiohttp.ClientTimeout(
        total=total_timeout,
        connect=HTTP_TIMEOUT_CONNECT,
        sock_read=HTTP_TIMEOUT_SOCK_READ,
    )
    headers = {
        "User-Agent": HTTP_USER_AGENT,
        "Accept": "application/json",
    }
    connector = aiohttp.TCPConnector(
        limit=connection_limit,
        force_close=False,
        enable_cleanup_closed=True,
    )
    session = aiohttp.ClientSession(
        timeout=timeout,
        headers=headers,
        connector=connector,
    )
    logger.debug("Created new aiohttp session")
    return session


async def close_session(session: aiohttp.ClientSession | None) -> None:
    """Close ``session`` if it is still open."""
    if session is None or session.closed:
        return
    try:
        await session.close()
    except aiohttp.ClientError as e:
        logger.warning("Error closing session: %s", e)
