"""Departure domain model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Departure:
    """Represents a single upcoming departure from a monitored stop."""

    line_name: str
    destination: str
    departure_time: datetime
    is_realtime: bool
