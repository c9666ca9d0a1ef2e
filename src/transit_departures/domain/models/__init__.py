"""Domain models for transit departures."""

from transit_departures.domain.models.configured_route import ConfiguredRoute
from transit_departures.domain.models.departure import Departure
from transit_departures.domain.models.departures_state import DeparturesState
from transit_departures.domain.models.error_details import ErrorDetails
from transit_departures.domain.models.station import Station
from transit_departures.domain.models.stop_monitoring_visit import StopMonitoringVisit
from transit_departures.domain.models.transit_line import TransitLine

__all__ = [
    "ConfiguredRoute",
    "Departure",
    "DeparturesState",
    "ErrorDetails",
    "Station",
    "StopMonitoringVisit",
    "TransitLine",
]
