"""Station repository port."""

from typing import Protocol

from transit_departures.domain.models.station import Station


class StationRepository(Protocol):
    """Port for retrieving the stops of an operator."""

    async def get_stops(self, operator_id: str) -> list[Station]:
        """Get all stops of an operator, sorted by name."""
        ...
