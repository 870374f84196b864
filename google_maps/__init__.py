"""
Google Maps Platform client package.

Typed request builders for the Directions, Geocoding and Roads web services,
executed through a shared rate-limited, retrying request core.
"""

from google_maps.apis import Api
from google_maps.client import GoogleMapsClient, Request
from google_maps.envelope import ServiceEnvelope, ServiceError, StatusEnvelope
from google_maps.types import (
    Avoid,
    Bounds,
    LatLng,
    TravelMode,
    UnitSystem,
)

__all__ = [
    "Api",
    "Avoid",
    "Bounds",
    "GoogleMapsClient",
    "LatLng",
    "Request",
    "ServiceEnvelope",
    "ServiceError",
    "StatusEnvelope",
    "TravelMode",
    "UnitSystem",
]
