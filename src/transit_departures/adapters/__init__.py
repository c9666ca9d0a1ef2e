"""Adapters layer - external system integrations."""

from transit_departures.adapters.config import AppConfig
from transit_departures.adapters.transit_api import AiohttpTransport, TransitClient

__all__ = [
    "AiohttpTransport",
    "AppConfig",
    "TransitClient",
]
