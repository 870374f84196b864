"""Geocoding API request builder (forward, reverse and place ID lookups)."""

from __future__ import annotations

from collections.abc import Mapping

from core.exceptions import ValidationException
from google_maps.apis import Api
from google_maps.client import Request
from google_maps.geocoding.response import GeocodingResponse
from google_maps.types import Bounds, LatLng

SERVICE_URL = "https://maps.googleapis.com/maps/api/geocode/json"

_LOOKUP_FIELDS = ("address", "latlng", "place_id")


class GeocodingRequest(Request[GeocodingResponse]):
    service_name = "Google Maps Geocoding"
    service_url = SERVICE_URL
    apis = (Api.ALL, Api.GEOCODING)
    response_type = GeocodingResponse
    field_order = (
        "address",
        "latlng",
        "place_id",
        "components",
        "bounds",
        "region",
        "language",
    )

    def with_address(self, address: str) -> GeocodingRequest:
        return self._set("address", address)

    def with_latlng(self, latlng: LatLng) -> GeocodingRequest:
        return self._set("latlng", latlng)

    def with_place_id(self, place_id: str) -> GeocodingRequest:
        return self._set("place_id", place_id)

    def with_components(self, components: Mapping[str, str]) -> GeocodingRequest:
        """Component filters such as ``{"country": "US"}``."""
        return self._set(
            "components",
            [f"{key}:{value}" for key, value in components.items()],
        )

    def with_bounds(self, bounds: Bounds) -> GeocodingRequest:
        return self._set("bounds", bounds)

    def with_region(self, region: str) -> GeocodingRequest:
        return self._set("region", region.lower())

    def with_language(self, language: str) -> GeocodingRequest:
        return self._set("language", language)

    def validate(self) -> None:
        super().validate()
        lookups = [name for name in _LOOKUP_FIELDS if self.field(name) is not None]
        if len(lookups) > 1:
            msg = f"{self.service_name}: set only one of {', '.join(_LOOKUP_FIELDS)}"
            raise ValidationException(msg, {"parameters": lookups})
        if not lookups and not self.field("components"):
            msg = f"{self.service_name}: an address, latlng, place_id or components is required"
            raise ValidationException(msg)
