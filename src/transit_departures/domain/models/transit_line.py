"""Transit line domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TransitLine:
    """Represents a line (route) run by an operator."""

    id: str
    name: str = ""

    @property
    def display_name(self) -> str:
        """Name shown to users, falling back to the identifier."""
        return self.name or self.id
