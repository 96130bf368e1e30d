"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import date
from pathlib import Path

import uvicorn
from pydantic import ValidationError

from whale_tracker import __version__
from whale_tracker.config import get_settings
from whale_tracker.datasources.inaturalist import fetch_suggestions
from whale_tracker.renderers.page import build_page_html
from whale_tracker.schemas import SearchCriteria, SearchSnapshot, SearchStatus, Sighting
from whale_tracker.state.coordinator import SearchCoordinator
from whale_tracker.web import create_app

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str) -> None:
    """Configure root logging for CLI runs."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="whale-tracker",
        description="Browse recent iNaturalist wildlife sightings on a map and a list",
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
        help="Enable debug mode",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")

    # 'search' command - one search, printed as text
    search_parser = subparsers.add_parser("search", help="Search sightings of a species")
    search_parser.add_argument("taxon", help="Species name, e.g. 'Blue Whale'")
    search_parser.add_argument(
        "--from",
        dest="date_from",
        type=date.fromisoformat,
        default=None,
        help="Earliest observation date, YYYY-MM-DD (default: 30 days ago)",
    )
    search_parser.add_argument(
        "--to",
        dest="date_to",
        type=date.fromisoformat,
        default=None,
        help="Latest observation date, YYYY-MM-DD (default: today)",
    )
    search_parser.add_argument(
        "--page",
        type=int,
        default=1,
        help="Results page, 200 sightings per page (default: 1)",
    )
    search_parser.add_argument(
        "--html",
        type=Path,
        default=None,
        help="Also write the rendered page to this file",
    )

    # 'suggest' command - species name autocomplete
    suggest_parser = subparsers.add_parser("suggest", help="Suggest species names")
    suggest_parser.add_argument("query", help="Partial species name")

    # 'serve' command - run the web app locally
    serve_parser = subparsers.add_parser("serve", help="Serve the web app locally")
    serve_parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Interface to bind (default: host from settings)",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to serve on (default: api_port from settings)",
    )

    return parser


async def run_search(criteria: SearchCriteria) -> SearchSnapshot:
    """Run one coordinator cycle for ``criteria`` and return the settled state."""
    coordinator = SearchCoordinator(criteria=criteria)
    try:
        coordinator.start()
        await coordinator.wait()
        return coordinator.snapshot()
    finally:
        await coordinator.aclose()


def format_sighting(sighting: Sighting) -> str:
    """One-line text summary of a sighting."""
    return (
        f"{sighting.observed_on or '?':<10}  {sighting.species_guess}  "
        f"{sighting.place_guess}  ({sighting.latitude:.5f}, {sighting.longitude:.5f})  "
        f"{sighting.uri}"
    )


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    return 0


def cmd_search(args: argparse.Namespace) -> int:
    """Handle the 'search' command."""
    settings = get_settings()
    defaults = SearchCriteria.default()
    try:
        criteria = SearchCriteria(
            taxon_name=args.taxon,
            date_from=args.date_from or defaults.date_from,
            date_to=args.date_to or defaults.date_to,
            page_number=args.page,
        )
    except ValidationError as e:
        print(f"Error: invalid search: {e}", file=sys.stderr)
        return 1

    snapshot = asyncio.run(run_search(criteria))
    if snapshot.status == SearchStatus.FAILED:
        print(f"Error: {snapshot.error}", file=sys.stderr)
        return 1

    result = snapshot.result
    print(f"{result.total_count} observations found for {criteria.taxon_name!r}")
    if result.page_count:
        print(f"Page {result.page_number} of {result.page_count}")
    for sighting in result.sightings:
        print(format_sighting(sighting))

    if args.html is not None:
        html = build_page_html(snapshot, app_name=settings.app_name)
        args.html.write_text(html, encoding="utf-8")
        print(f"Wrote {args.html}")
    return 0


def cmd_suggest(args: argparse.Namespace) -> int:
    """Handle the 'suggest' command."""

    def report(e: Exception) -> None:
        print(f"Warning: suggestion lookup failed: {e}", file=sys.stderr)

    for suggestion in fetch_suggestions(args.query, on_error=report):
        line = suggestion.display_name
        if suggestion.preferred_common_name and suggestion.name:
            line += f" ({suggestion.name})"
        if suggestion.rank:
            line += f" [{suggestion.rank}]"
        print(line)
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Handle the 'serve' command: run the web app with uvicorn."""
    settings = get_settings()
    host = args.host or settings.host
    port = args.port if args.port is not None else settings.api_port

    print(f"Serving on http://{host}:{port}/ (Ctrl+C to stop)")
    uvicorn.run(
        create_app(settings=settings),
        host=host,
        port=port,
        log_level="debug" if args.debug else settings.log_level.lower(),
    )
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    settings = get_settings()
    configure_logging("DEBUG" if args.debug or settings.debug else settings.log_level)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "info": cmd_info,
        "search": cmd_search,
        "suggest": cmd_suggest,
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
