"""Derives station and line lists from normalized stop and line records."""

import logging
import math
from collections.abc import Sequence

from transit_departures.adapters.transit_api.schema_normalizer import (
    FamilyRecords,
    LineRecord,
    StopRecord,
)
from transit_departures.domain.errors import NoStopsFoundError
from transit_departures.domain.models.station import Station
from transit_departures.domain.models.transit_line import TransitLine

logger = logging.getLogger(__name__)


class StationParser:
    """Builds the station list of an operator."""

    @staticmethod
    def parse_stations(families: Sequence[FamilyRecords[StopRecord]]) -> list[Station]:
        """Parse stations from the first schema family that yields any.

        Args:
            families: Stop records per schema family, in precedence order.

        Returns:
            Stations sorted by name. Stations sharing a name keep their upstream order.

        Raises:
            NoStopsFoundError: If no family yields a usable station.
        """
        for family, records in families:
            stations = [
                station
                for station in (StationParser._build_station(record) for record in records)
                if station
            ]
            if stations:
                logger.debug(f"Using {len(stations)} stop(s) from the {family} family")
                return sorted(stations, key=lambda station: station.name)

        raise NoStopsFoundError()

    @staticmethod
    def _build_station(record: StopRecord) -> Station | None:
        """Build a Station, or None if the record lacks an id or a name."""
        if not record.id or not record.name:
            logger.debug(f"Dropping stop record without id or name: {record}")
            return None

        return Station(
            id=record.id,
            name=record.name,
            latitude=StationParser._parse_coordinate(record.latitude),
            longitude=StationParser._parse_coordinate(record.longitude),
        )

    @staticmethod
    def _parse_coordinate(value: str | float | None) -> float | None:
        """Parse a decimal coordinate; absent or malformed values yield None."""
        if value is None:
            return None

        try:
            coordinate = float(value)
        except (ValueError, TypeError):
            return None

        return coordinate if math.isfinite(coordinate) else None


class LineParser:
    """Builds the line list of an operator."""

    @staticmethod
    def parse_lines(families: Sequence[FamilyRecords[LineRecord]]) -> list[TransitLine]:
        """Parse lines from the first schema family that delivers any records.

        Args:
            families: Line records per schema family, in precedence order.

        Returns:
            Lines sorted by display name, possibly empty.
        """
        records: list[LineRecord] = []
        for family, family_records in families:
            if family_records:
                logger.debug(f"Using {len(family_records)} line record(s) from the {family} family")
                records = family_records
                break

        lines = [line for line in (LineParser._build_line(record) for record in records) if line]
        return sorted(lines, key=lambda line: line.display_name)

    @staticmethod
    def _build_line(record: LineRecord) -> TransitLine | None:
        """Build a TransitLine, or None if the record has no identifier."""
        line_id = record.id or record.alternate_id
        if not line_id:
            logger.debug(f"Dropping line record without id: {record}")
            return None

        return TransitLine(id=line_id, name=record.name or record.public_code or "")
