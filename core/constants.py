"""Global constants for the core package.

This module contains shared constants used by the HTTP and retry layers.
"""

from typing import Final

# HTTP Client Constants
HTTP_CONNECTION_LIMIT: Final[int] = 10
HTTP_TIMEOUT_CONNECT: Final[float] = 10.0
HTTP_TIMEOUT_SOCK_READ: Final[float] = 60.0
HTTP_TIMEOUT_TOTAL: Final[float] = 120.0
HTTP_USER_AGENT: Final[str] = "google-maps-core/0.1"

# Backoff defaults
RETRY_MAX_ATTEMPTS: Final[int] = 10
RETRY_INITIAL_INTERVAL: Final[float] = 0.5
RETRY_MULTIPLIER: Final[float] = 1.5
RETRY_MAX_INTERVAL: Final[float] = 60.0
RETRY_JITTER: Final[float] = 0.5
RETRY_MAX_ELAPSED: Final[float] = 900.0
