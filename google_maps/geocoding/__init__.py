"""Google Maps Geocoding API."""

from google_maps.geocoding.request import SERVICE_URL, GeocodingRequest
from google_maps.geocoding.response import GeocodingResponse, GeocodingResult

__all__ = [
    "SERVICE_URL",
    "GeocodingRequest",
    "GeocodingResponse",
    "GeocodingResult",
]
