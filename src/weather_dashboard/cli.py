"""
Command-line interface for the dashboard.

Every command drives the same controllers an interactive page would: city
names go through the autocomplete controller, forms are submitted through
``Dashboard`` and the result is read back from the in-memory HTML page.
"""

from __future__ import annotations

import argparse
import asyncio
import functools
import http.server
import sys
from pathlib import Path

from weather_dashboard import __version__
from weather_dashboard.autocomplete import AutocompleteController
from weather_dashboard.config import get_settings
from weather_dashboard.dashboard import Dashboard
from weather_dashboard.datasources.geocoding import search_cities
from weather_dashboard.errors import WeatherDashboardError
from weather_dashboard.flows.build import build_dashboard, snapshot_dashboard
from weather_dashboard.log import setup_logging
from weather_dashboard.renderers.page import HtmlDashboardPage, LocationCard


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="weather-dashboard",
        description="3-day weather forecasts for your location and a list of cities",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")

    search_parser = subparsers.add_parser("search", help="Search cities by name")
    search_parser.add_argument("query", help="City name (or its beginning)")
    search_parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of results (default: search_limit from settings)",
    )

    add_parser = subparsers.add_parser("add", help="Add an extra city")
    add_parser.add_argument("query", help="City name")
    add_parser.add_argument(
        "--pick",
        type=int,
        default=1,
        help="Which suggestion to pick, 1-based (default: 1)",
    )

    remove_parser = subparsers.add_parser("remove", help="Remove an extra city")
    remove_parser.add_argument("city_id", type=int, help="City id (see 'show')")

    main_parser = subparsers.add_parser("main", help="Choose the main city")
    main_parser.add_argument("query", help="City name")
    main_parser.add_argument(
        "--pick",
        type=int,
        default=1,
        help="Which suggestion to pick, 1-based (default: 1)",
    )

    subparsers.add_parser("locate", help="Use the device position as main location")
    subparsers.add_parser("show", help="Fetch and print every forecast")
    subparsers.add_parser("build", help="Build the static dashboard page")

    serve_parser = subparsers.add_parser("serve", help="Serve the built page locally")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to serve on (default: api_port from settings)",
    )

    return parser


# =============================================================================
# Output helpers
# =============================================================================


def print_card(title: str, card: LocationCard) -> None:
    """Print a location's status line and its day cards."""
    print(title)
    print(f"  {card.status.text}")
    for entry in card.forecast.entries:
        print(f"  {entry.label:<14} {entry.temperature:>10}  {entry.description}")


def print_page(page: HtmlDashboardPage) -> None:
    print_card(page.main_title or "-", page.main)
    for city_id, card in page.cards.items():
        name = card.city.display_name if card.city else str(city_id)
        print()
        print_card(f"{name} [{city_id}]", card)


def new_dashboard() -> tuple[Dashboard, HtmlDashboardPage]:
    page = HtmlDashboardPage()
    return Dashboard.from_settings(page, get_settings()), page


async def pick_suggestion(field: AutocompleteController, query: str, pick: int) -> str | None:
    """Type ``query`` into ``field`` and select suggestion ``pick``; returns an error text."""
    field.on_input(query)
    await field.wait_idle()
    if not field.suggestions:
        return f"No cities found for '{query}'"
    if not 1 <= pick <= len(field.suggestions):
        return f"--pick must be between 1 and {len(field.suggestions)}"
    field.select(field.suggestions[pick - 1])
    return None


# =============================================================================
# Commands
# =============================================================================


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"State file: {settings.state_file}")
    if settings.lat is not None and settings.lon is not None:
        print(f"Device position: ({settings.lat}, {settings.lon})")
    else:
        print("Device position: not configured")
    return 0


def cmd_search(args: argparse.Namespace) -> int:
    """Handle the 'search' command."""
    limit = args.limit if args.limit is not None else get_settings().search_limit
    try:
        cities = search_cities(args.query, limit=limit)
    except WeatherDashboardError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not cities:
        print(f"No cities found for '{args.query}'")
        return 0
    for i, city in enumerate(cities, start=1):
        print(f"{i:>2}. {city.display_name}  [id {city.id}]  ({city.lat:.4f}, {city.lon:.4f})")
    return 0


async def _add(query: str, pick: int) -> int:
    dashboard, page = new_dashboard()
    dashboard.load()
    try:
        error = await pick_suggestion(dashboard.city_input, query, pick)
        if error:
            print(f"Error: {error}", file=sys.stderr)
            return 1

        city = dashboard.submit_extra_city()
        if city is None:
            print(f"Error: {page.city_field.error}", file=sys.stderr)
            return 1

        await dashboard.settle()
        card = page.city_card(city.id)
        if card is not None:
            print_card(f"Added {city.display_name} [{city.id}]", card)
        return 0
    finally:
        dashboard.close()


def cmd_add(args: argparse.Namespace) -> int:
    """Handle the 'add' command."""
    return asyncio.run(_add(args.query, args.pick))


async def _remove(city_id: int) -> int:
    dashboard, _page = new_dashboard()
    state = dashboard.load()
    if city_id not in state.extra_city_ids:
        print(f"Error: no extra city with id {city_id}", file=sys.stderr)
        return 1
    dashboard.remove_extra_city(city_id)
    print(f"Removed city {city_id}")
    return 0


def cmd_remove(args: argparse.Namespace) -> int:
    """Handle the 'remove' command."""
    return asyncio.run(_remove(args.city_id))


async def _main_city(query: str, pick: int) -> int:
    dashboard, page = new_dashboard()
    dashboard.load()
    try:
        error = await pick_suggestion(dashboard.modal_input, query, pick)
        if error:
            print(f"Error: {error}", file=sys.stderr)
            return 1

        if dashboard.submit_main_city() is None:
            print(f"Error: {page.modal_field.error}", file=sys.stderr)
            return 1

        await dashboard.settle()
        print_card(page.main_title, page.main)
        return 0
    finally:
        dashboard.close()


def cmd_main(args: argparse.Namespace) -> int:
    """Handle the 'main' command."""
    return asyncio.run(_main_city(args.query, args.pick))


async def _locate() -> int:
    dashboard, page = new_dashboard()
    dashboard.load()
    dashboard.request_geolocation()
    await dashboard.settle()
    print_card(page.main_title, page.main)
    if page.modal_visible:
        print("Choose a main city with: weather-dashboard main <name>")
        return 1
    return 0


def cmd_locate(_args: argparse.Namespace) -> int:
    """Handle the 'locate' command."""
    return asyncio.run(_locate())


def cmd_show(_args: argparse.Namespace) -> int:
    """Handle the 'show' command."""
    dashboard, page = new_dashboard()
    asyncio.run(snapshot_dashboard(dashboard, page))
    print_page(page)
    if page.modal_visible:
        print()
        print("Choose a main city with: weather-dashboard main <name>")
    return 0


def cmd_build(_args: argparse.Namespace) -> int:
    """Handle the 'build' command."""
    result = build_dashboard()
    print(f"Built {result['output']}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Handle the 'serve' command: serve the built page locally."""
    settings = get_settings()
    port = args.port if args.port is not None else settings.api_port
    site_dir = Path(settings.site_dir)

    if not site_dir.exists():
        print("No site directory found. Run 'weather-dashboard build' first.", file=sys.stderr)
        return 1

    handler = functools.partial(http.server.SimpleHTTPRequestHandler, directory=str(site_dir))

    with http.server.HTTPServer(("", port), handler) as server:
        print(f"Serving dashboard on http://localhost:{port}/ (Ctrl+C to stop)")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            print("\nServer stopped.")

    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    settings = get_settings()
    setup_logging("DEBUG" if args.debug or settings.debug else settings.log_level)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "info": cmd_info,
        "search": cmd_search,
        "add": cmd_add,
        "remove": cmd_remove,
        "main": cmd_main,
        "locate": cmd_locate,
        "show": cmd_show,
        "build": cmd_build,
        "serve": cmd_serve,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
