"""Domain layer - core business logic and models."""

from transit_departures.domain.errors import (
    DecodeError,
    HttpStatusError,
    InvalidRequestError,
    MissingCredentialError,
    NoStopsFoundError,
    TransitApiError,
    TransportError,
)
from transit_departures.domain.models import (
    ConfiguredRoute,
    Departure,
    Station,
    TransitLine,
)
from transit_departures.domain.ports import (
    DepartureRepository,
    LineRepository,
    StationRepository,
)

__all__ = [
    "ConfiguredRoute",
    "DecodeError",
    "Departure",
    "DepartureRepository",
    "HttpStatusError",
    "InvalidRequestError",
    "LineRepository",
    "MissingCredentialError",
    "NoStopsFoundError",
    "Station",
    "StationRepository",
    "TransitApiError",
    "TransitLine",
    "TransportError",
]
