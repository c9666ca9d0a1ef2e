"""Application services (use cases) for the departures view-model."""

import asyncio
import logging
from dataclasses import replace
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from transit_departures.domain.errors import TransitApiError
from transit_departures.domain.models import ConfiguredRoute, DeparturesState, ErrorDetails

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from transit_departures.domain.contracts import StateListenerProtocol
    from transit_departures.domain.ports import DepartureRepository


class DeparturesService:
    """Fetches departures for a configured route and publishes observable state.

    Each published state is an immutable snapshot that replaces the previous
    one, so observers never see a half-updated state. Every refresh publishes
    a loading state first and then exactly one terminal state carrying either
    the departures or an error message.

    All refreshes are expected to run on one event loop.
    """

    def __init__(self, departure_repository: "DepartureRepository") -> None:
        """Initialize with a departure repository."""
        self._departure_repository = departure_repository
        self._state = DeparturesState()
        self._listeners: list[StateListenerProtocol] = []

    @property
    def state(self) -> DeparturesState:
        """The most recently published state."""
        return self._state

    def add_listener(self, listener: "StateListenerProtocol") -> None:
        """Register a callable notified with every published state."""
        self._listeners.append(listener)

    async def refresh(self, route: ConfiguredRoute) -> DeparturesState:
        """Fetch departures for the route and publish the outcome.

        Args:
            route: Stop to monitor and optional line filter.

        Returns:
            The terminal state of this refresh.

        Raises:
            asyncio.CancelledError: If the refresh is cancelled; a failed state
                is published before re-raising.
        """
        self._publish(
            replace(self._state, is_loading=True, error_message=None, error_details=None)
        )

        try:
            departures = await self._departure_repository.get_departures(route)
        except TransitApiError as e:
            logger.warning(f"Fetching departures for stop {route.stop_code} failed: {e}")
            self._publish_failure(e.details())
        except asyncio.CancelledError:
            logger.info(f"Fetching departures for stop {route.stop_code} was cancelled")
            self._publish_failure(ErrorDetails(reason="Request cancelled"))
            raise
        except Exception as e:
            logger.exception(f"Unexpected error fetching departures for stop {route.stop_code}")
            self._publish_failure(ErrorDetails(reason=str(e) or type(e).__name__))
        else:
            logger.debug(f"Fetched {len(departures)} departure(s) for stop {route.stop_code}")
            self._publish(
                DeparturesState(
                    is_loading=False,
                    departures=departures,
                    last_update=datetime.now(UTC),
                )
            )

        return self._state

    def _publish_failure(self, details: ErrorDetails) -> None:
        self._publish(
            DeparturesState(
                is_loading=False,
                error_message=details.reason,
                error_details=details,
                departures=[],
                last_update=self._state.last_update,
            )
        )

    def _publish(self, state: DeparturesState) -> None:
        self._state = state
        for listener in self._listeners:
            listener(state)
