"""Google Maps Roads API."""

from google_maps.roads.request import (
    MAX_POINTS,
    NEAREST_ROADS_URL,
    SNAP_TO_ROADS_URL,
    NearestRoadsRequest,
    SnapToRoadsRequest,
)
from google_maps.roads.response import (
    NearestRoadsResponse,
    SnappedPoint,
    SnapToRoadsResponse,
)

__all__ = [
    "MAX_POINTS",
    "NEAREST_ROADS_URL",
    "SNAP_TO_ROADS_URL",
    "NearestRoadsRequest",
    "NearestRoadsResponse",
    "SnapToRoadsRequest",
    "SnapToRoadsResponse",
    "SnappedPoint",
]
