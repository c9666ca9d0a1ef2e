"""Transit API client.

Runs one HTTP round trip per operation and hands the response to the schema
normalizer and parsers:

    validate -> request -> check status -> strip BOM -> decode -> derive

API Documentation: https://511.org/open-data/transit
"""

import logging
from datetime import datetime

from yarl import URL

from transit_departures.adapters.api_request_logger import log_api_request
from transit_departures.adapters.transit_api.constants import (
    DEFAULT_HEADERS,
    LINES_PATH,
    MAX_DEPARTURES,
    RESPONSE_FORMAT,
    STOP_MONITORING_PATH,
    STOPS_PATH,
    TRANSIT_BASE_URL,
    UTF8_BOM,
)
from transit_departures.adapters.transit_api.departure_parser import DepartureParser
from transit_departures.adapters.transit_api.schema_normalizer import (
    normalize_lines,
    normalize_stop_monitoring,
    normalize_stops,
)
from transit_departures.adapters.transit_api.stop_line_parser import LineParser, StationParser
from transit_departures.domain.errors import (
    HttpStatusError,
    InvalidRequestError,
    MissingCredentialError,
)
from transit_departures.domain.models.configured_route import ConfiguredRoute
from transit_departures.domain.models.departure import Departure
from transit_departures.domain.models.station import Station
from transit_departures.domain.models.transit_line import TransitLine
from transit_departures.domain.ports.credential_provider import CredentialProvider
from transit_departures.domain.ports.departure_repository import DepartureRepository
from transit_departures.domain.ports.http_transport import HttpTransport
from transit_departures.domain.ports.line_repository import LineRepository
from transit_departures.domain.ports.station_repository import StationRepository

logger = logging.getLogger(__name__)


def strip_bom(body: bytes) -> bytes:
    """Remove a leading UTF-8 byte-order mark."""
    return body.removeprefix(UTF8_BOM)


class TransitClient(DepartureRepository, StationRepository, LineRepository):
    """Adapter for departures, stops and lines of the transit API."""

    def __init__(
        self,
        credentials: CredentialProvider,
        transport: HttpTransport,
        base_url: str = TRANSIT_BASE_URL,
        max_departures: int = MAX_DEPARTURES,
    ) -> None:
        """Initialize the client.

        Args:
            credentials: Source of the API key, read on every request.
            transport: HTTP transport performing the GET requests.
            base_url: API root, e.g. "https://api.511.org/transit".
            max_departures: Maximum number of departures per fetch; values above
                ``MAX_DEPARTURES`` are capped.
        """
        self._credentials = credentials
        self._transport = transport
        self._base_url = base_url
        self._max_departures = max_departures

    async def get_departures(
        self, route: ConfiguredRoute, now: datetime | None = None
    ) -> list[Departure]:
        """Get the next departures at the route's stop.

        Args:
            route: Operator, stop and optional line filter.
            now: Timezone-aware reference time; departures not after it are dropped.
                Defaults to the current time.

        Returns:
            Up to ``max_departures`` departures, soonest first. Possibly empty.

        Raises:
            ValueError: If ``now`` is a naive datetime.
        """
        url = self._build_url(
            STOP_MONITORING_PATH, {"agency": route.operator_id, "stopCode": route.stop_code}
        )
        payload = await self._fetch(url)
        visits = normalize_stop_monitoring(payload)
        departures = DepartureParser.parse_departures(
            visits, route.line_id, now=now, limit=self._max_departures
        )
        logger.debug(
            f"Derived {len(departures)} departure(s) from {len(visits)} visit(s) "
            f"at stop {route.stop_code}"
        )
        return departures

    async def get_stops(self, operator_id: str) -> list[Station]:
        """Get all stops of an operator.

        Raises:
            NoStopsFoundError: If the response holds no usable stop.
        """
        url = self._build_url(STOPS_PATH, {"operator_id": operator_id})
        payload = await self._fetch(url)
        return StationParser.parse_stations(normalize_stops(payload))

    async def get_lines(self, operator_id: str) -> list[TransitLine]:
        """Get all lines of an operator. Possibly empty."""
        url = self._build_url(LINES_PATH, {"operator_id": operator_id})
        payload = await self._fetch(url)
        return LineParser.parse_lines(normalize_lines(payload))

    def _build_url(self, path: str, params: dict[str, str]) -> str:
        """Build the request URL.

        Raises:
            MissingCredentialError: If no API key is configured.
            InvalidRequestError: If the URL cannot be formed from the identifiers.
        """
        api_key = self._credentials.get_api_key()
        if not api_key:
            raise MissingCredentialError()

        missing = [name for name, value in params.items() if not value]
        if missing:
            raise InvalidRequestError(f"Invalid URL: missing {', '.join(missing)}")

        query = {"api_key": api_key, **params, "format": RESPONSE_FORMAT}
        try:
            base = URL(self._base_url)
            if not base.is_absolute() or base.scheme not in ("http", "https"):
                raise InvalidRequestError(
                    f"Invalid URL: {self._base_url!r} is not an HTTP(S) URL"
                )
            endpoint = base / path
            url = endpoint.with_query(query)
        except (TypeError, ValueError) as e:
            raise InvalidRequestError(f"Invalid URL: {e}") from e

        log_api_request("GET", str(endpoint), params=query, headers=DEFAULT_HEADERS)
        return str(url)

    async def _fetch(self, url: str) -> bytes:
        """Perform the GET and return the body without byte-order mark.

        Raises:
            TransportError: If the round trip fails.
            HttpStatusError: If the status is not 200.
        """
        response = await self._transport.get(url)

        if response.status != 200:
            logger.warning(f"Transit API returned status {response.status} for {URL(url).path}")
            raise HttpStatusError(response.status)

        return strip_bom(response.body)
