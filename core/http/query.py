"""Query string assembly for GET requests.

Turns an ordered mapping of optional, typed fields into the canonical query
string sent to the service. Fields left as ``None`` are omitted.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from enum import Enum
from typing import Any
from urllib.parse import quote

# Characters the Maps web services expect unescaped in coordinates and lists
QUERY_SAFE_CHARS = ",|:"


def serialize_value(value: Any) -> str:
    """Render one field value the way the web services expect it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        # Naive datetimes are taken as UTC
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return str(int(value.timestamp()))
    if isinstance(value, Sequence) and not isinstance(value, str):
        return "|".join(serialize_value(item) for item in value)
    return str(value)


def assemble_query(fields: Mapping[str, Any]) -> str:
    """
    Build a query string from ``fields`` in their declaration order.

    The result is deterministic for a given mapping. Unset fields and empty
    lists are skipped, so a request with nothing set yields ``""``.
    """
    parts: list[str] = []
    for key, value in fields.items():
        if value is None or (isinstance(value, (list, tuple)) and not value):
            continue
        parts.append(f"{key}={quote(serialize_value(value), safe=QUERY_SAFE_CHARS)}")
    return "&".join(parts)
