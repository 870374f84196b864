import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
TESTS = Path(__file__).resolve().parent

for path in (ROOT, TESTS):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

import pytest  # noqa: E402
from network_blocker import install_network_blocker  # noqa: E402

from core.http.retry import RetryPolicy  # noqa: E402

_RATE_SETTINGS = (
    "GOOGLE_MAPS_RATE_ALL",
    "GOOGLE_MAPS_RATE_DIRECTIONS",
    "GOOGLE_MAPS_RATE_GEOCODING",
    "GOOGLE_MAPS_RATE_ROADS",
    "GOOGLE_MAPS_MAX_ATTEMPTS",
    "GOOGLE_MAPS_MAX_ELAPSED",
)


@pytest.fixture(autouse=True)
def _default_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "test-key")
    for setting in _RATE_SETTINGS:
        monkeypatch.delenv(setting, raising=False)
    install_network_blocker(monkeypatch)


@pytest.fixture
def fast_retry() -> RetryPolicy:
    """Retry policy without delays so fault sequences run instantly."""
    return RetryPolicy(
        max_attempts=5,
        initial_interval=0,
        jitter=0,
        max_elapsed=None,
    )
