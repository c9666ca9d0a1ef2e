"""Departures state dataclass."""

from dataclasses import dataclass, field
from datetime import datetime

from transit_departures.domain.models.departure import Departure
from transit_departures.domain.models.error_details import ErrorDetails


@dataclass(frozen=True)
class DeparturesState:
    """Observable snapshot of the departures view-model.

    A snapshot is never mutated; every transition publishes a new one.
    """

    is_loading: bool = False
    error_message: str | None = None
    error_details: ErrorDetails | None = None
    departures: list[Departure] = field(default_factory=list)
    last_update: datetime | None = None

    @property
    def has_error(self) -> bool:
        """Whether the last fetch ended in a failure."""
        return self.error_message is not None
