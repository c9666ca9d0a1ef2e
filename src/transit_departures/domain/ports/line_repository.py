"""Line repository port."""

from typing import Protocol

from transit_departures.domain.models.transit_line import TransitLine


class LineRepository(Protocol):
    """Port for retrieving the lines of an operator."""

    async def get_lines(self, operator_id: str) -> list[TransitLine]:
        """Get all lines of an operator, sorted by display name."""
        ...
