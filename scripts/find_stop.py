#!/usr/bin/env python3
"""Helper script to find stop codes of an operator by name."""

import asyncio
import sys

import aiohttp

from transit_departures.adapters.config import AppConfig
from transit_departures.adapters.transit_api import AiohttpTransport, TransitClient
from transit_departures.cli import filter_stations
from transit_departures.domain.errors import TransitApiError
from transit_departures.domain.models import Station


def _print_station_info(station: Station) -> None:
    """Print station information."""
    print(f"\n  Code: {station.id}")
    print(f"  Name: {station.name}")
    if station.latitude is not None and station.longitude is not None:
        print(f"  Coordinates: {station.latitude}, {station.longitude}")


async def find_stop(operator_id: str, name: str) -> None:
    """Find stops of an operator whose name contains the given text."""
    config = AppConfig()
    print(f"Searching {operator_id} stops for: {name}")

    async with aiohttp.ClientSession() as session:
        client = TransitClient(
            credentials=config,
            transport=AiohttpTransport(session, timeout_seconds=config.transit_api_timeout),
            base_url=config.transit_api_base_url,
        )
        try:
            stations = await client.get_stops(operator_id)
        except TransitApiError as e:
            print(f"Error: {e}")
            sys.exit(1)

    matches = filter_stations(stations, name)
    if not matches:
        print(f"No stop matching '{name}'")
        sys.exit(1)

    for station in matches:
        _print_station_info(station)


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("Usage: python find_stop.py <operator_id> <stop_name>")
        print('Example: python find_stop.py SF "Church"')
        sys.exit(1)

    asyncio.run(find_stop(sys.argv[1], sys.argv[2]))
