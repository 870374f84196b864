"""Centralized configuration for environment variables and external APIs.

This module is the single source of truth for configuration used by the
client. Import constants or getters from here rather than calling os.getenv
directly in multiple places. Getters read the environment at call time so a
running process picks up changes made after import.
"""

from __future__ import annotations

import os
from typing import Final

from dotenv import load_dotenv

from core.exceptions import ValidationException
from core.http.rate_limit import RateBudget
from core.http.retry import RetryPolicy
from google_maps.apis import Api

# Load environment variables from .env if present
load_dotenv()


# Requests per second across all APIs unless GOOGLE_MAPS_RATE_ALL overrides it
DEFAULT_RATE_ALL: Final[str] = "50/1"

_DISABLED = {"", "0", "off", "none", "unlimited"}


def get_google_maps_api_key() -> str:
    return os.getenv("GOOGLE_MAPS_API_KEY", "").strip()


def require_google_maps_api_key() -> str:
    api_key = get_google_maps_api_key()
    if not api_key:
        msg = "GOOGLE_MAPS_API_KEY is not configured"
        raise ValidationException(msg, {"setting": "GOOGLE_MAPS_API_KEY"})
    return api_key


def parse_rate_budget(value: str, *, setting: str = "rate") -> RateBudget | None:
    """Parse ``"<max>/<seconds>"`` (or ``"<max>"`` per second) into a budget.

    Returns None for values that disable throttling, such as ``"off"``.
    """
    text = value.strip().lower()
    if text in _DISABLED:
        return None
    count, _, period = text.partition("/")
    try:
        max_rate = float(count)
        time_period = float(period) if period else 1.0
    except ValueError as exc:
        msg = f"Invalid rate limit for {setting}: {value!r}"
        raise ValidationException(msg, {"setting": setting, "value": value}) from exc
    try:
        return RateBudget(max_rate=max_rate, time_period=time_period)
    except ValueError as exc:
        msg = f"Rate limit for {setting} must allow at least one call: {value!r}"
        raise ValidationException(msg, {"setting": setting, "value": value}) from exc


def get_rate_budgets() -> dict[Api, RateBudget]:
    """Budgets per API category from ``GOOGLE_MAPS_RATE_<API>`` variables."""
    budgets: dict[Api, RateBudget] = {}
    for api in Api:
        setting = f"GOOGLE_MAPS_RATE_{api.name}"
        default = DEFAULT_RATE_ALL if api is Api.ALL else ""
        budget = parse_rate_budget(os.getenv(setting, default), setting=setting)
        if budget is not None:
            budgets[api] = budget
    return budgets


def _env_number(setting: str, default: float) -> float:
    raw = os.getenv(setting, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        msg = f"{setting} must be a number, got {raw!r}"
        raise ValidationException(msg, {"setting": setting, "value": raw}) from exc


def get_retry_policy() -> RetryPolicy:
    """Retry policy with ``GOOGLE_MAPS_MAX_ATTEMPTS``/``_MAX_ELAPSED`` overrides.

    A ``GOOGLE_MAPS_MAX_ELAPSED`` of 0 removes the total time ceiling.
    """
    defaults = RetryPolicy()
    max_attempts = int(_env_number("GOOGLE_MAPS_MAX_ATTEMPTS", defaults.max_attempts))
    max_elapsed = _env_number("GOOGLE_MAPS_MAX_ELAPSED", defaults.max_elapsed or 0)
    try:
        return RetryPolicy(
            max_attempts=max_attempts,
            max_elapsed=max_elapsed or None,
        )
    except ValueError as exc:
        raise ValidationException(str(exc), {"setting": "GOOGLE_MAPS_MAX_ATTEMPTS"}) from exc


__all__ = [
    "DEFAULT_RATE_ALL",
    "get_google_maps_api_key",
    "get_rate_budgets",
    "get_retry_policy",
    "parse_rate_budget",
    "require_google_maps_api_key",
]
