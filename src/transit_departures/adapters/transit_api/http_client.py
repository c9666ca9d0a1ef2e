"""aiohttp transport for transit API requests."""

import logging
from typing import TYPE_CHECKING

import aiohttp

from transit_departures.adapters.transit_api.constants import DEFAULT_HEADERS
from transit_departures.domain.errors import TransportError
from transit_departures.domain.ports.http_transport import HttpResponse, HttpTransport

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession


class AiohttpTransport(HttpTransport):
    """Performs single GET requests over a shared aiohttp session."""

    def __init__(self, session: "ClientSession", timeout_seconds: float = 10) -> None:
        """Initialize with an aiohttp session.

        Args:
            session: Session used for all requests; owned by the caller.
            timeout_seconds: Total time allowed for one request, body included.
        """
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def get(self, url: str) -> HttpResponse:
        """Fetch the URL and return its raw body and status.

        Raises:
            TransportError: On connection, DNS or timeout failures.
        """
        try:
            async with self._session.get(
                url, headers=DEFAULT_HEADERS, timeout=self._timeout
            ) as response:
                body = await response.read()
                return HttpResponse(body=body, status=response.status)
        except TimeoutError as e:
            logger.warning(f"Transit API request timed out after {self._timeout.total}s")
            raise TransportError(
                f"Request timed out after {self._timeout.total:g} seconds"
            ) from e
        except aiohttp.ClientError as e:
            logger.warning(f"Transit API request failed: {e}")
            raise TransportError(f"Network request failed: {e}") from e
