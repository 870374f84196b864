"""Directions API request builder."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import TYPE_CHECKING, Literal

from google_maps.apis import Api
from google_maps.client import Request
from google_maps.directions.response import DirectionsResponse
from google_maps.types import Avoid, Location, TravelMode, UnitSystem

if TYPE_CHECKING:
    from google_maps.client import GoogleMapsClient

SERVICE_URL = "https://maps.googleapis.com/maps/api/directions/json"


class DirectionsRequest(Request[DirectionsResponse]):
    """
    Directions between an origin and a destination.

    ``arrival_time`` and ``departure_time`` cannot be combined. Both setters
    only record their value; ``build()`` raises ``ValidationException`` when
    both are set, so neither silently wins.
    """

    service_name = "Google Maps Directions"
    service_url = SERVICE_URL
    apis = (Api.ALL, Api.DIRECTIONS)
    response_type = DirectionsResponse
    field_order = (
        "origin",
        "destination",
        "mode",
        "waypoints",
        "alternatives",
        "avoid",
        "language",
        "units",
        "region",
        "arrival_time",
        "departure_time",
    )
    exclusive_fields = (("arrival_time", "departure_time"),)

    def __init__(
        self,
        client: GoogleMapsClient,
        origin: Location,
        destination: Location,
    ) -> None:
        super().__init__(client)
        self._set("origin", origin)
        self._set("destination", destination)

    def with_travel_mode(self, mode: TravelMode) -> DirectionsRequest:
        return self._set("mode", TravelMode(mode))

    def with_waypoints(self, waypoints: Iterable[Location]) -> DirectionsRequest:
        return self._set("waypoints", list(waypoints))

    def with_alternatives(self, alternatives: bool) -> DirectionsRequest:
        return self._set("alternatives", alternatives)

    def with_restrictions(self, avoid: Iterable[Avoid]) -> DirectionsRequest:
        return self._set("avoid", [Avoid(item) for item in avoid])

    def with_language(self, language: str) -> DirectionsRequest:
        return self._set("language", language)

    def with_unit_system(self, units: UnitSystem) -> DirectionsRequest:
        return self._set("units", UnitSystem(units))

    def with_region(self, region: str) -> DirectionsRequest:
        return self._set("region", region.lower())

    def with_arrival_time(self, arrival_time: datetime) -> DirectionsRequest:
        """The time the passenger should arrive at their final destination by.

        Only used for transit directions. Naive datetimes are taken as UTC.
        """
        return self._set("arrival_time", arrival_time)

    def with_departure_time(
        self,
        departure_time: datetime | Literal["now"],
    ) -> DirectionsRequest:
        """The desired time of departure, or ``"now"``."""
        return self._set("departure_time", departure_time)
