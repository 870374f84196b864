"""Rate-limit categories for the Google Maps Platform web services."""

from enum import StrEnum

from core.http.rate_limit import ALL_APIS


class Api(StrEnum):
    ALL = ALL_APIS
    DIRECTIONS = "directions"
    GEOCODING = "geocoding"
    ROADS = "roads"
