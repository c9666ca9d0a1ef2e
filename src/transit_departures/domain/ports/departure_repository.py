"""Departure repository port."""

from datetime import datetime
from typing import Protocol

from transit_departures.domain.models.configured_route import ConfiguredRoute
from transit_departures.domain.models.departure import Departure


class DepartureRepository(Protocol):
    """Port for retrieving upcoming departures."""

    async def get_departures(
        self, route: ConfiguredRoute, now: datetime | None = None
    ) -> list[Departure]:
        """Get the next departures at the route's stop, soonest first."""
        ...
