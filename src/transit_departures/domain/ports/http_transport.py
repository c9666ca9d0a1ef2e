"""HTTP transport port."""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class HttpResponse:
    """Raw result of one HTTP GET."""

    body: bytes
    status: int


class HttpTransport(Protocol):
    """Port for performing a single HTTP GET request."""

    async def get(self, url: str) -> HttpResponse:
        """Fetch the URL.

        Raises:
            TransportError: If the round trip fails before a response arrives.
        """
        ...
