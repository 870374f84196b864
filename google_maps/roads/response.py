"""Roads API response models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from google_maps.envelope import ServiceEnvelope


class RoadsLocation(BaseModel):
    latitude: float
    longitude: float


class SnappedPoint(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    location: RoadsLocation
    original_index: int | None = Field(default=None, alias="originalIndex")
    place_id: str | None = Field(default=None, alias="placeId")


class NearestRoadsResponse(ServiceEnvelope):
    snapped_points: list[SnappedPoint] = Field(
        default_factory=list,
        alias="snappedPoints",
    )


class SnapToRoadsResponse(ServiceEnvelope):
    snapped_points: list[SnappedPoint] = Field(
        default_factory=list,
        alias="snappedPoints",
    )
    warning_message: str | None = Field(default=None, alias="warningMessage")

    def coordinates(self) -> list[list[float]]:
        """Snapped path as [lon, lat] pairs with consecutive duplicates removed."""
        deduped: list[list[float]] = []
        for point in self.snapped_points:
            coord = [point.location.longitude, point.location.latitude]
            if not deduped or deduped[-1] != coord:
                deduped.append(coord)
        return deduped
