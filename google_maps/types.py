"""Value types shared by the request builders."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel

from core.exceptions import ValidationException


@dataclass(frozen=True)
class LatLng:
    lat: float
    lng: float

    def __post_init__(self) -> None:
        if not (-90.0 <= self.lat <= 90.0 and -180.0 <= self.lng <= 180.0):
            msg = f"Coordinate out of range: {self.lat},{self.lng}"
            raise ValidationException(msg, {"lat": self.lat, "lng": self.lng})

    def __str__(self) -> str:
        return f"{self.lat},{self.lng}"


@dataclass(frozen=True)
class Bounds:
    southwest: LatLng
    northeast: LatLng

    def __str__(self) -> str:
        return f"{self.southwest}|{self.northeast}"


class TravelMode(StrEnum):
    DRIVING = "driving"
    WALKING = "walking"
    BICYCLING = "bicycling"
    TRANSIT = "transit"


class Avoid(StrEnum):
    TOLLS = "tolls"
    HIGHWAYS = "highways"
    FERRIES = "ferries"
    INDOOR = "indoor"


class UnitSystem(StrEnum):
    METRIC = "metric"
    IMPERIAL = "imperial"


class LatLngLiteral(BaseModel):
    """``{"lat": ..., "lng": ...}`` as returned by the JSON web services."""

    lat: float
    lng: float


Location = str | LatLng
