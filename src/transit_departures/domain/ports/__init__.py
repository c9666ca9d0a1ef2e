"""Ports (interfaces) for the ports-and-adapters architecture."""

from transit_departures.domain.ports.credential_provider import CredentialProvider
from transit_departures.domain.ports.departure_repository import DepartureRepository
from transit_departures.domain.ports.http_transport import HttpResponse, HttpTransport
from transit_departures.domain.ports.line_repository import LineRepository
from transit_departures.domain.ports.station_repository import StationRepository

__all__ = [
    "CredentialProvider",
    "DepartureRepository",
    "HttpResponse",
    "HttpTransport",
    "LineRepository",
    "StationRepository",
]
