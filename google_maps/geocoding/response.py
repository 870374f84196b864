"""Geocoding API response models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from google_maps.envelope import StatusEnvelope
from google_maps.types import LatLngLiteral


class AddressComponent(BaseModel):
    long_name: str = ""
    short_name: str = ""
    types: list[str] = Field(default_factory=list)


class Geometry(BaseModel):
    model_config = ConfigDict(extra="allow")

    location: LatLngLiteral
    location_type: str | None = None


class GeocodingResult(BaseModel):
    model_config = ConfigDict(extra="allow")

    formatted_address: str = ""
    place_id: str | None = None
    geometry: Geometry | None = None
    address_components: list[AddressComponent] = Field(default_factory=list)
    types: list[str] = Field(default_factory=list)
    partial_match: bool = False

    def component(self, component_type: str) -> str | None:
        """Long name of the first address component of ``component_type``."""
        for component in self.address_components:
            if component_type in component.types:
                return component.long_name
        return None


class GeocodingResponse(StatusEnvelope):
    status: str
    results: list[GeocodingResult] = Field(default_factory=list)
