import pytest

from core.constants import HTTP_USER_AGENT
from core.http.session import close_session, create_session


@pytest.mark.asyncio
async def test_session_defaults_and_close() -> None:
    session = create_session(total_timeout=5)

    assert session.timeout.total == 5
    assert session.headers["User-Agent"] == HTTP_USER_AGENT

    await close_session(session)
    assert session.closed

    # Closing twice, or closing nothing, is a no-op
    await close_session(session)
    await close_session(None)
