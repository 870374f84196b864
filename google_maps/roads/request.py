"""Roads API request builders: Nearest Roads and Snap to Roads."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from core.exceptions import ValidationException
from google_maps.apis import Api
from google_maps.client import Request
from google_maps.roads.response import NearestRoadsResponse, SnapToRoadsResponse
from google_maps.types import LatLng

if TYPE_CHECKING:
    from google_maps.client import GoogleMapsClient

NEAREST_ROADS_URL = "https://roads.googleapis.com/v1/nearestRoads"
SNAP_TO_ROADS_URL = "https://roads.googleapis.com/v1/snapToRoads"

# Both endpoints accept at most 100 points per request
MAX_POINTS = 100


def _to_points(points: Iterable[Any], *, parameter: str) -> list[LatLng]:
    normalized: list[LatLng] = []
    for point in points:
        if isinstance(point, LatLng):
            normalized.append(point)
            continue
        # A two-character string would otherwise unpack into a pair
        if isinstance(point, (str, bytes)):
            msg = f"Invalid {parameter} entry: {point!r}"
            raise ValidationException(msg, {"parameter": parameter})
        try:
            lat, lng = point
            normalized.append(LatLng(float(lat), float(lng)))
        except (TypeError, ValueError) as exc:
            msg = f"Invalid {parameter} entry: {point!r}"
            raise ValidationException(msg, {"parameter": parameter}) from exc
    return normalized


def _check_count(service_name: str, parameter: str, points: list[LatLng] | None) -> None:
    if not points:
        msg = f"{service_name} requires at least one point in {parameter}"
        raise ValidationException(msg, {"parameter": parameter})
    if len(points) > MAX_POINTS:
        msg = f"{service_name} accepts at most {MAX_POINTS} points, got {len(points)}"
        raise ValidationException(msg, {"parameter": parameter, "count": len(points)})


class NearestRoadsRequest(Request[NearestRoadsResponse]):
    """Closest road segment for each of up to 100 independent points."""

    service_name = "Google Maps Nearest Roads"
    service_url = NEAREST_ROADS_URL
    apis = (Api.ALL, Api.ROADS)
    response_type = NearestRoadsResponse
    field_order = ("points",)

    def __init__(self, client: GoogleMapsClient, points: Iterable[Any]) -> None:
        super().__init__(client)
        self.with_points(points)

    def with_points(self, points: Iterable[Any]) -> NearestRoadsRequest:
        return self._set("points", _to_points(points, parameter="points"))

    def validate(self) -> None:
        super().validate()
        _check_count(self.service_name, "points", self.field("points"))


class SnapToRoadsRequest(Request[SnapToRoadsResponse]):
    """Road-snapped geometry for a GPS path of up to 100 points."""

    service_name = "Google Maps Snap to Roads"
    service_url = SNAP_TO_ROADS_URL
    apis = (Api.ALL, Api.ROADS)
    response_type = SnapToRoadsResponse
    field_order = ("path", "interpolate")

    def __init__(self, client: GoogleMapsClient, path: Iterable[Any]) -> None:
        super().__init__(client)
        self.with_path(path)

    def with_path(self, path: Iterable[Any]) -> SnapToRoadsRequest:
        return self._set("path", _to_points(path, parameter="path"))

    def with_interpolate(self, interpolate: bool) -> SnapToRoadsRequest:
        return self._set("interpolate", interpolate)

    def validate(self) -> None:
        super().validate()
        _check_count(self.service_name, "path", self.field("path"))
