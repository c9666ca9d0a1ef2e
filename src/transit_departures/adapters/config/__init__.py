"""Configuration adapters."""

from transit_departures.adapters.config.app_config import AppConfig
from transit_departures.adapters.config.route_configuration_loader import (
    RouteConfigurationLoader,
)

__all__ = ["AppConfig", "RouteConfigurationLoader"]
