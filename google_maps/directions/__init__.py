"""Google Maps Directions API."""

from google_maps.directions.request import SERVICE_URL, DirectionsRequest
from google_maps.directions.response import DirectionsResponse, Leg, Route

__all__ = [
    "SERVICE_URL",
    "DirectionsRequest",
    "DirectionsResponse",
    "Leg",
    "Route",
]
