"""Protocol for observing departures state."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from transit_departures.domain.models.departures_state import DeparturesState


class StateListenerProtocol(Protocol):
    """Callable notified with every published departures state snapshot."""

    def __call__(self, state: "DeparturesState") -> None:
        """Receive the newly published state.

        Args:
            state: The snapshot that was just published.
        """
        ...
