"""Parser for upstream timestamp strings."""

import re
from datetime import datetime

from transit_departures.adapters.transit_api.constants import TIME_FORMATS, TIME_PATTERN

_TIME_RE = re.compile(TIME_PATTERN)


class TimeParseError(ValueError):
    """Raised when a timestamp matches none of the accepted formats."""


def parse_time(time_str: str, formats: tuple[str, ...] = TIME_FORMATS) -> datetime:
    """Parse an ISO 8601 timestamp with an explicit UTC offset.

    Only zero-padded fields are accepted. Formats are tried in order,
    fractional seconds first.

    Args:
        time_str: Raw timestamp, e.g. "2030-01-01T10:00:00.000Z".
        formats: strptime formats to try.

    Returns:
        Timezone-aware datetime.

    Raises:
        TimeParseError: If the string is empty or matches no format.
    """
    if not time_str:
        raise TimeParseError("Empty timestamp")

    if not _TIME_RE.fullmatch(time_str):
        raise TimeParseError(f"Not an ISO 8601 timestamp: {time_str!r}")

    for time_format in formats:
        try:
            return datetime.strptime(time_str, time_format)
        except ValueError:
            continue

    raise TimeParseError(f"Unrecognized timestamp: {time_str!r}")
