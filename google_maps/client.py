"""
Google Maps Platform client.

:class:`GoogleMapsClient` owns the HTTP session, the rate limiter, and the
retry policy shared by every request made through it. Endpoint builders
subclass :class:`Request`: they populate fields, ``build()`` the query, and
``get()`` runs the shared pipeline::

    rate limit -> GET -> classify -> retry or return

Only the final result reaches the caller: the parsed envelope on success,
:class:`~core.exceptions.MapsRequestError` on a terminal failure, or
:class:`~core.exceptions.QueryNotBuiltError` if ``get()`` runs before
``build()``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from types import TracebackType
from typing import TYPE_CHECKING, Any, ClassVar, Generic, Self, TypeVar

from core.exceptions import MapsRequestError, QueryNotBuiltError, ValidationException
from core.http.classifier import Success, Transient, classify
from core.http.query import assemble_query
from core.http.rate_limit import RateLimiter
from core.http.request import fetch_raw
from core.http.retry import AttemptObserver, RetryPolicy, RetryResult, execute_with_retry
from core.http.session import close_session, create_session
from google_maps.apis import Api
from google_maps.envelope import ServiceEnvelope

if TYPE_CHECKING:
    import aiohttp

    from google_maps.directions.request import DirectionsRequest
    from google_maps.geocoding.request import GeocodingRequest
    from google_maps.roads.request import NearestRoadsRequest, SnapToRoadsRequest
    from google_maps.types import Location

logger = logging.getLogger(__name__)

EnvelopeT = TypeVar("EnvelopeT", bound=ServiceEnvelope)


class GoogleMapsClient:
    """Async client for the Google Maps Platform web services.

    Args:
        api_key: Platform API key. Defaults to ``GOOGLE_MAPS_API_KEY``.
        rate_limiter: Limiter shared by all requests of this client. Defaults
            to one built from the ``GOOGLE_MAPS_RATE_*`` settings.
        retry_policy: Backoff limits. Defaults to the configured policy.
        session: Existing aiohttp session. The client closes only sessions it
            created itself.
        on_attempt: Callback invoked with every attempt's outcome.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        rate_limiter: RateLimiter | None = None,
        retry_policy: RetryPolicy | None = None,
        session: aiohttp.ClientSession | None = None,
        on_attempt: AttemptObserver | None = None,
    ) -> None:
        from config import get_rate_budgets, get_retry_policy, require_google_maps_api_key

        self._api_key = api_key or require_google_maps_api_key()
        self.rate_limiter = rate_limiter or RateLimiter(
            get_rate_budgets(),
            all_category=Api.ALL,
        )
        self.retry_policy = retry_policy or get_retry_policy()
        self.on_attempt = on_attempt
        self._session = session
        self._owns_session = session is None

    async def get_session(self) -> aiohttp.ClientSession:
        if self._session is None or (self._owns_session and self._session.closed):
            self._session = create_session()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._owns_session:
            await close_session(self._session)
            self._session = None

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def get(
        self,
        service_url: str,
        query: str,
        *,
        apis: Iterable[Api],
        response_type: type[EnvelopeT],
        service_name: str,
    ) -> EnvelopeT:
        """Execute one GET through rate limiting, classification and retries."""
        apis = tuple(apis)
        logger.debug(
            "Making HTTP GET request to %s: `%s?%s`",
            service_name,
            service_url,
            query,
        )
        # The key is appended here so it never shows up in logs
        params = "&".join(filter(None, [query, assemble_query({"key": self._api_key})]))
        url = f"{service_url}?{params}"
        session = await self.get_session()

        async def attempt():
            # Every attempt, retries included, is throttled
            await self.rate_limiter.acquire(apis)
            outcome = await fetch_raw(session, url)
            return classify(outcome, response_type, service_name=service_name)

        result = await execute_with_retry(
            attempt,
            self.retry_policy,
            service_name=service_name,
            on_attempt=self.on_attempt,
        )
        if isinstance(result.outcome, Success):
            return result.outcome.payload
        raise _terminal_error(service_name, result)

    # --- Endpoint builders ---

    def directions(self, origin: Location, destination: Location) -> DirectionsRequest:
        from google_maps.directions.request import DirectionsRequest

        return DirectionsRequest(self, origin, destination)

    def geocoding(self) -> GeocodingRequest:
        from google_maps.geocoding.request import GeocodingRequest

        return GeocodingRequest(self)

    def nearest_roads(self, points: Iterable[Any]) -> NearestRoadsRequest:
        from google_maps.roads.request import NearestRoadsRequest

        return NearestRoadsRequest(self, points)

    def snap_to_roads(self, path: Iterable[Any]) -> SnapToRoadsRequest:
        from google_maps.roads.request import SnapToRoadsRequest

        return SnapToRoadsRequest(self, path)


def _terminal_error(service_name: str, result: RetryResult) -> MapsRequestError:
    outcome = result.outcome
    cause = outcome.cause
    retryable = isinstance(outcome, Transient)
    if retryable:
        msg = f"{cause.message} (gave up after {result.attempts} attempt(s))"
    else:
        msg = cause.message
    return MapsRequestError(
        msg,
        {
            "service": service_name,
            "kind": str(cause.kind),
            "status": cause.status,
            "service_status": cause.service_status,
            "service_message": cause.service_message,
            "retryable": retryable,
            "attempts": result.attempts,
            "cause": cause.exception,
        },
    )


class Request(Generic[EnvelopeT]):
    """
    Base request builder.

    Subclasses declare the endpoint through class attributes and expose
    ``with_*`` setters that store typed values. Fields are serialized in
    ``field_order``, so the built query does not depend on the order the
    setters were called in.
    """

    service_name: ClassVar[str]
    service_url: ClassVar[str]
    apis: ClassVar[tuple[Api, ...]]
    response_type: ClassVar[type[ServiceEnvelope]]
    field_order: ClassVar[tuple[str, ...]]
    # Pairs of fields the service refuses to receive together
    exclusive_fields: ClassVar[tuple[tuple[str, str], ...]] = ()

    def __init__(self, client: GoogleMapsClient) -> None:
        self.client = client
        self._fields: dict[str, Any] = {}
        self.query: str | None = None

    def _set(self, name: str, value: Any) -> Self:
        if name not in self.field_order:
            msg = f"{self.service_name} has no parameter {name!r}"
            raise ValidationException(msg, {"parameter": name})
        self._fields[name] = value
        self.query = None
        return self

    def field(self, name: str) -> Any:
        return self._fields.get(name)

    def validate(self) -> None:
        """Reject combinations the service would refuse."""
        for first, second in self.exclusive_fields:
            if self.field(first) is not None and self.field(second) is not None:
                msg = (
                    f"{self.service_name}: {first} and {second} are mutually "
                    "exclusive; set only one"
                )
                raise ValidationException(msg, {"parameters": [first, second]})

    def build(self) -> Self:
        self.validate()
        ordered = {name: self._fields.get(name) for name in self.field_order}
        self.query = assemble_query(ordered)
        return self

    async def get(self) -> EnvelopeT:
        if self.query is None:
            raise QueryNotBuiltError(self.service_name)
        return await self.client.get(
            self.service_url,
            self.query,
            apis=self.apis,
            response_type=self.response_type,
            service_name=self.service_name,
        )

    async def execute(self) -> EnvelopeT:
        """Build the query and run the request."""
        return await self.build().get()
