"""12-factor configuration adapter using environment variables and TOML config."""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from transit_departures.adapters.transit_api.constants import MAX_DEPARTURES, TRANSIT_BASE_URL


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Transit API configuration
    transit_api_key: str = Field(default="", description="API key for the transit data API")
    transit_api_base_url: str = Field(
        default=TRANSIT_BASE_URL, description="Base URL of the transit data API"
    )
    transit_api_timeout: int = Field(
        default=10, description="Timeout for transit API requests in seconds"
    )
    max_departures: int = Field(
        default=MAX_DEPARTURES, description="Maximum number of departures to show per stop"
    )

    # TOML config file path with [[routes]] tables
    config_file: str | None = Field(
        default=None,
        description="Path to TOML configuration file with configured routes",
    )

    @field_validator("transit_api_timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        """Validate the timeout is positive."""
        if v <= 0:
            raise ValueError("transit_api_timeout must be positive")
        return v

    @field_validator("max_departures")
    @classmethod
    def validate_max_departures(cls, v: int) -> int:
        """Validate max_departures is within 1..MAX_DEPARTURES."""
        if not 1 <= v <= MAX_DEPARTURES:
            raise ValueError(f"max_departures must be between 1 and {MAX_DEPARTURES}")
        return v

    def get_api_key(self) -> str:
        """Return the API key, or an empty string when unconfigured."""
        return self.transit_api_key.strip()

    def _load_toml_data(self) -> dict[str, Any]:
        """Load and parse the TOML config file."""
        if not self.config_file:
            raise ValueError("config_file must be set to load routes configuration")

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            return tomllib.load(f)

    def get_routes_config(self) -> list[dict[str, Any]]:
        """Parse and return routes configuration as a list of dicts from TOML file.

        Raises ValueError if 'routes' is not a list of tables.
        """
        toml_data = self._load_toml_data()

        routes = toml_data.get("routes", [])
        if not isinstance(routes, list):
            raise ValueError("TOML config 'routes' must be a list")
        return [route for route in routes if isinstance(route, dict)]
