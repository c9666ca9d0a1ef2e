"""Contracts (protocols) shared between the application layer and its callers."""

from transit_departures.domain.contracts.state_listener import StateListenerProtocol

__all__ = ["StateListenerProtocol"]
