"""Stop monitoring visit model.

One upstream real-time observation of a vehicle at a monitored stop, flattened
out of the nested upstream journey/call structure.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class StopMonitoringVisit:
    """Flattened view of one monitored stop visit."""

    line_ref: str | None = None
    published_line_name: str | None = None
    destination_name: str | None = None
    monitored: bool | None = None
    expected_departure_time: str | None = None
    aimed_departure_time: str | None = None
    expected_arrival_time: str | None = None
    aimed_arrival_time: str | None = None

    def candidate_times(self) -> tuple[str | None, str | None, str | None, str | None]:
        """Return the raw time strings in precedence order."""
        return (
            self.expected_departure_time,
            self.aimed_departure_time,
            self.expected_arrival_time,
            self.aimed_arrival_time,
        )

    @property
    def has_call_information(self) -> bool:
        """Whether any candidate time field is present."""
        return any(value is not None for value in self.candidate_times())
