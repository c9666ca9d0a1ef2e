"""Station domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Station:
    """Represents a public transport stop of an operator."""

    id: str
    name: str
    latitude: float | None = None
    longitude: float | None = None
