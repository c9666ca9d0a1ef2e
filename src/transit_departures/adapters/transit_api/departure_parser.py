"""Derives the departure board from stop monitoring visits."""

import logging
from collections.abc import Iterable
from datetime import UTC, datetime

from transit_departures.adapters.transit_api.constants import (
    FALLBACK_DESTINATION,
    FALLBACK_LINE_NAME,
    MAX_DEPARTURES,
)
from transit_departures.adapters.transit_api.time_parser import TimeParseError, parse_time
from transit_departures.domain.models.departure import Departure
from transit_departures.domain.models.stop_monitoring_visit import StopMonitoringVisit

logger = logging.getLogger(__name__)


class DepartureParser:
    """Turns noisy per-visit records into a short, time-ordered departure list."""

    @staticmethod
    def parse_departures(
        visits: Iterable[StopMonitoringVisit],
        line_filter: str = "",
        now: datetime | None = None,
        limit: int = MAX_DEPARTURES,
    ) -> list[Departure]:
        """Parse departures from stop monitoring visits.

        Args:
            visits: Visits of one stop monitoring delivery.
            line_filter: Only keep visits whose line reference equals this value.
                Empty keeps every line.
            now: Reference time (timezone-aware); departures not after it are dropped.
                Defaults to the current time.
            limit: Maximum number of departures to return, never more than
                ``MAX_DEPARTURES``.

        Returns:
            Upcoming departures, soonest first.

        Raises:
            ValueError: If ``now`` is a naive datetime.
        """
        if now is not None and now.utcoffset() is None:
            raise ValueError("now must be a timezone-aware datetime")

        reference_time = now or datetime.now(UTC)
        results = []

        for visit in visits:
            departure = DepartureParser._parse_visit(visit, line_filter, reference_time)
            if departure:
                results.append(departure)

        results.sort(key=lambda departure: departure.departure_time)
        return results[: min(limit, MAX_DEPARTURES)]

    @staticmethod
    def _parse_visit(
        visit: StopMonitoringVisit, line_filter: str, now: datetime
    ) -> Departure | None:
        """Parse a single visit into a Departure, or None if it is not shown."""
        if line_filter and visit.line_ref != line_filter:
            return None

        if not visit.has_call_information:
            return None

        time_str = DepartureParser._select_time(visit)
        if not time_str:
            return None

        try:
            departure_time = parse_time(time_str)
        except TimeParseError as e:
            logger.debug(f"Skipping visit of line {visit.line_ref}: {e}")
            return None

        if departure_time <= now:
            return None

        return Departure(
            line_name=visit.published_line_name or visit.line_ref or FALLBACK_LINE_NAME,
            destination=visit.destination_name or FALLBACK_DESTINATION,
            departure_time=departure_time,
            is_realtime=bool(visit.monitored),
        )

    @staticmethod
    def _select_time(visit: StopMonitoringVisit) -> str | None:
        """Pick the first non-empty of expected/aimed departure, then expected/aimed arrival."""
        return next((time_str for time_str in visit.candidate_times() if time_str), None)
