"""Configured route domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ConfiguredRoute:
    """A stop to monitor, optionally restricted to one line."""

    operator_id: str
    stop_code: str
    line_id: str = ""  # Empty means departures of every line are shown
    name: str = ""  # Display label, used by route configuration files

    @property
    def has_line_filter(self) -> bool:
        """Whether departures are restricted to a single line."""
        return bool(self.line_id)
