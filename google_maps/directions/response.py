"""Directions API response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from google_maps.envelope import StatusEnvelope
from google_maps.polyline import decode_polyline
from google_maps.types import LatLngLiteral


class TextValue(BaseModel):
    text: str = ""
    value: float = 0


class Leg(BaseModel):
    model_config = ConfigDict(extra="allow")

    distance: TextValue | None = None
    duration: TextValue | None = None
    start_address: str | None = None
    end_address: str | None = None
    start_location: LatLngLiteral | None = None
    end_location: LatLngLiteral | None = None
    steps: list[dict[str, Any]] = Field(default_factory=list)


class Polyline(BaseModel):
    points: str = ""


class Route(BaseModel):
    model_config = ConfigDict(extra="allow")

    summary: str = ""
    legs: list[Leg] = Field(default_factory=list)
    overview_polyline: Polyline | None = None
    warnings: list[str] = Field(default_factory=list)
    waypoint_order: list[int] = Field(default_factory=list)

    @property
    def distance_meters(self) -> float:
        return sum(leg.distance.value for leg in self.legs if leg.distance)

    @property
    def duration_seconds(self) -> float:
        return sum(leg.duration.value for leg in self.legs if leg.duration)

    def geometry(self) -> dict[str, Any] | None:
        """GeoJSON LineString of the overview polyline, if any."""
        if self.overview_polyline is None or not self.overview_polyline.points:
            return None
        coords = decode_polyline(self.overview_polyline.points)
        return {"type": "LineString", "coordinates": coords}


class DirectionsResponse(StatusEnvelope):
    status: str
    routes: list[Route] = Field(default_factory=list)
    geocoded_waypoints: list[dict[str, Any]] = Field(default_factory=list)
    available_travel_modes: list[str] = Field(default_factory=list)
