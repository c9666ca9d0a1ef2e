"""Route configuration loader."""

import logging
from typing import Any

from transit_departures.adapters.config.app_config import AppConfig
from transit_departures.domain.models.configured_route import ConfiguredRoute

logger = logging.getLogger(__name__)


class RouteConfigurationLoader:
    """Loads configured routes from app config."""

    @staticmethod
    def load_route_from_data(route_data: dict[str, Any]) -> ConfiguredRoute:
        """Load a single route from a [[routes]] table.

        Raises:
            ValueError: If operator_id or stop_code is missing.
        """
        operator_id = str(route_data.get("operator_id", "")).strip()
        stop_code = str(route_data.get("stop_code", "")).strip()
        if not operator_id or not stop_code:
            raise ValueError("All routes must have 'operator_id' and 'stop_code' fields")

        line_id = str(route_data.get("line_id", "") or "").strip()
        name = str(route_data.get("name", "") or "").strip()
        if not name:
            name = f"{operator_id} {stop_code}" + (f" ({line_id})" if line_id else "")

        return ConfiguredRoute(
            operator_id=operator_id,
            stop_code=stop_code,
            line_id=line_id,
            name=name,
        )

    @staticmethod
    def load(config: AppConfig) -> list[ConfiguredRoute]:
        """Load all configured routes.

        Raises:
            ValueError: If a route is incomplete or route names are not unique.
        """
        routes = [
            RouteConfigurationLoader.load_route_from_data(route_data)
            for route_data in config.get_routes_config()
        ]

        names = [route.name for route in routes]
        if len(names) != len(set(names)):
            duplicates = {name for name in names if names.count(name) > 1}
            raise ValueError(f"Route names must be unique. Duplicate names found: {duplicates}")

        logger.debug(f"Loaded {len(routes)} configured route(s)")
        return routes

    @staticmethod
    def find(routes: list[ConfiguredRoute], name: str) -> ConfiguredRoute | None:
        """Find a configured route by name."""
        return next((route for route in routes if route.name == name), None)
