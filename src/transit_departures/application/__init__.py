"""Application layer - use cases."""

from transit_departures.application.services import DeparturesService

__all__ = ["DeparturesService"]
