"""Command line client for departures, stops and lines of the transit API."""

import asyncio
import json
import logging
import sys
from dataclasses import asdict
from datetime import datetime
from typing import Any

import aiohttp

from transit_departures.adapters.config import AppConfig, RouteConfigurationLoader
from transit_departures.adapters.transit_api import AiohttpTransport, TransitClient
from transit_departures.application.services import DeparturesService
from transit_departures.domain.errors import TransitApiError
from transit_departures.domain.models import ConfiguredRoute, Departure, Station, TransitLine


def _configure_logging(verbose: bool) -> None:
    """Configure logging to stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def _format_minutes(departure_time: datetime, now: datetime) -> str:
    """Format time until departure as "now" or "N min"."""
    minutes = int((departure_time - now).total_seconds() // 60)
    return "now" if minutes < 1 else f"{minutes} min"


def format_departure(departure: Departure, now: datetime) -> str:
    """Format a departure as a single board line."""
    local_time = departure.departure_time.astimezone().strftime("%H:%M")
    marker = "*" if departure.is_realtime else " "
    return (
        f"{local_time}{marker} {_format_minutes(departure.departure_time, now):>7}  "
        f"{departure.line_name:<8} {departure.destination}"
    )


def format_station(station: Station) -> str:
    """Format a station with its coordinates when known."""
    if station.latitude is None or station.longitude is None:
        return f"{station.id:<10} {station.name}"
    return f"{station.id:<10} {station.name} ({station.latitude:.5f}, {station.longitude:.5f})"


def format_line(line: TransitLine) -> str:
    """Format a line as id and display name."""
    return f"{line.id:<10} {line.display_name}"


def filter_stations(stations: list[Station], query: str | None) -> list[Station]:
    """Keep stations whose name contains the query, case-insensitively."""
    if not query:
        return stations
    query_lower = query.lower()
    return [station for station in stations if query_lower in station.name.lower()]


def _departure_to_json(departure: Departure) -> dict[str, Any]:
    data = asdict(departure)
    data["departure_time"] = departure.departure_time.isoformat()
    return data


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _resolve_route(args: Any, config: AppConfig) -> ConfiguredRoute:
    """Build the route from arguments or look it up in the config file."""
    if args.route:
        routes = RouteConfigurationLoader.load(config)
        route = RouteConfigurationLoader.find(routes, args.route)
        if route is None:
            raise ValueError(f"No configured route named '{args.route}'")
        return route

    if not args.operator_id or not args.stop_code:
        raise ValueError("Either --route or OPERATOR and STOP_CODE are required")

    return ConfiguredRoute(
        operator_id=args.operator_id, stop_code=args.stop_code, line_id=args.line or ""
    )


async def _handle_departures_command(
    client: TransitClient, route: ConfiguredRoute, as_json: bool
) -> None:
    """Handle the departures command."""
    service = DeparturesService(client)
    state = await service.refresh(route)

    if state.has_error:
        print(f"Error: {state.error_message}", file=sys.stderr)
        sys.exit(1)

    if as_json:
        _print_json([_departure_to_json(departure) for departure in state.departures])
        return

    if not state.departures:
        print("No upcoming departures")
        return

    now = state.last_update or datetime.now().astimezone()
    for departure in state.departures:
        print(format_departure(departure, now))


async def _handle_stops_command(
    client: TransitClient, operator_id: str, query: str | None, as_json: bool
) -> None:
    """Handle the stops command."""
    stations = filter_stations(await client.get_stops(operator_id), query)

    if as_json:
        _print_json([asdict(station) for station in stations])
        return

    print(f"{len(stations)} stop(s) for {operator_id}:")
    for station in stations:
        print(f"  {format_station(station)}")


async def _handle_lines_command(client: TransitClient, operator_id: str, as_json: bool) -> None:
    """Handle the lines command."""
    lines = await client.get_lines(operator_id)

    if as_json:
        _print_json([{"id": line.id, "name": line.name} for line in lines])
        return

    if not lines:
        print(f"No lines found for {operator_id}")
        return

    print(f"{len(lines)} line(s) for {operator_id}:")
    for line in lines:
        print(f"  {format_line(line)}")


def _handle_routes_command(config: AppConfig) -> None:
    """Handle the routes command."""
    routes = RouteConfigurationLoader.load(config)
    if not routes:
        print("No routes configured")
        return

    for route in routes:
        line = f" line {route.line_id}" if route.has_line_filter else ""
        print(f"  {route.name}: {route.operator_id} stop {route.stop_code}{line}")


def _setup_argparse() -> Any:
    """Set up and configure argument parser."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Transit departures, stops and lines",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Next departures at a stop
  transit-departures departures SF 15696

  # Only one line
  transit-departures departures SF 15696 --line N

  # A route from the config file (CONFIG_FILE=routes.toml)
  transit-departures departures --route "Home"

  # Stops of an operator, filtered by name
  transit-departures stops SF --query "Church"

  # Lines of an operator
  transit-departures lines SF

The API key is read from TRANSIT_API_KEY (environment or .env).
API: https://511.org/open-data/transit
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    departures_parser = subparsers.add_parser("departures", help="Show next departures")
    departures_parser.add_argument("operator_id", nargs="?", help="Operator ID (e.g., SF)")
    departures_parser.add_argument("stop_code", nargs="?", help="Stop code (e.g., 15696)")
    departures_parser.add_argument("--line", help="Only show departures of this line")
    departures_parser.add_argument("--route", help="Name of a route from the config file")
    departures_parser.add_argument("--json", action="store_true", help="Output as JSON")

    stops_parser = subparsers.add_parser("stops", help="List stops of an operator")
    stops_parser.add_argument("operator_id", help="Operator ID (e.g., SF)")
    stops_parser.add_argument("--query", help="Only show stops whose name contains this text")
    stops_parser.add_argument("--json", action="store_true", help="Output as JSON")

    lines_parser = subparsers.add_parser("lines", help="List lines of an operator")
    lines_parser.add_argument("operator_id", help="Operator ID (e.g., SF)")
    lines_parser.add_argument("--json", action="store_true", help="Output as JSON")

    subparsers.add_parser("routes", help="List routes from the config file")

    return parser


async def _execute_command(args: Any, config: AppConfig) -> None:
    """Execute the appropriate command based on args."""
    if args.command == "routes":
        _handle_routes_command(config)
        return

    async with aiohttp.ClientSession() as session:
        transport = AiohttpTransport(session, timeout_seconds=config.transit_api_timeout)
        client = TransitClient(
            credentials=config,
            transport=transport,
            base_url=config.transit_api_base_url,
            max_departures=config.max_departures,
        )

        if args.command == "departures":
            route = _resolve_route(args, config)
            await _handle_departures_command(client, route, args.json)
        elif args.command == "stops":
            await _handle_stops_command(client, args.operator_id, args.query, args.json)
        elif args.command == "lines":
            await _handle_lines_command(client, args.operator_id, args.json)


async def main() -> None:
    """Main CLI entry point."""
    parser = _setup_argparse()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    _configure_logging(args.verbose)

    try:
        config = AppConfig()
        await _execute_command(args, config)
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(1)
    except (TransitApiError, ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_main()
