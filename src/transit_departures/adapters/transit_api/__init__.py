"""Transit API adapters (511.org open transit data)."""

from transit_departures.adapters.transit_api.http_client import AiohttpTransport
from transit_departures.adapters.transit_api.transit_client import TransitClient

__all__ = ["AiohttpTransport", "TransitClient"]
