"""Command-line front end for the route planner.

Examples:
    flightpaths "Calgary, Canada"
    flightpaths YYC --destination POP --legs
    flightpaths --near 51.05 -114.07
    flightpaths --list-airports
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from .config import AppConfig, get_config
from .container import Container
from .domain.errors import ConfigurationError, LedgerLoadError
from .domain.models import Airport, Destination, DestinationOptions
from .formatting import format_options
from .logging_config import configure_logging
from .services import RoutePlannerService


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flightpaths",
        description="Rank direct and one-stop flight options from a home airport.",
    )
    parser.add_argument("origin", nargs="?", help="'City, Country' or IATA code")
    parser.add_argument(
        "--destination",
        help="query a single destination instead of the configured ones",
    )
    parser.add_argument(
        "--multi-hop",
        type=_positive_int,
        metavar="LEGS",
        help="allow routes of up to LEGS legs (single destination only)",
    )
    parser.add_argument("--data", type=Path, help="path to a flights JSON Lines file")
    parser.add_argument(
        "--consolidate",
        action="store_true",
        help="merge duplicate airport pairs before building the ledger",
    )
    parser.add_argument(
        "--near",
        nargs=2,
        type=float,
        metavar=("LAT", "LON"),
        help="pick the closest airport as origin",
    )
    parser.add_argument("--list-airports", action="store_true")
    parser.add_argument("--legs", action="store_true", help="show every leg and airline")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING...")
    return parser


def _apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    updates = {}
    if args.data is not None:
        updates["data_dir"] = args.data.parent
        updates["flights_file"] = args.data.name
    if args.consolidate:
        updates["consolidate_duplicates"] = True
    if not updates:
        return config
    return config.model_copy(update={"ledger": config.ledger.model_copy(update=updates)})


def _pick_origin(
    planner: RoutePlannerService, args: argparse.Namespace
) -> Optional[Airport]:
    if args.origin:
        return planner.ledger.lookup(args.origin)
    if args.near:
        return planner.nearest_airport(args.near[0], args.near[1])
    return planner.default_origin()


def _single_destination(
    planner: RoutePlannerService, origin: Airport, args: argparse.Namespace
) -> Optional[DestinationOptions]:
    target = planner.ledger.lookup(args.destination)
    if target is None:
        return None

    configured = {d.airport: d for d in planner.destinations()}
    destination = configured.get(target, Destination(airport=target))

    if args.multi_hop is not None:
        routes = planner.find_multi_hop_routes(origin.key, target.key, args.multi_hop)
    else:
        routes = planner.find_routes(origin.key, target.key)
    return DestinationOptions(destination=destination, routes=tuple(routes))


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = _apply_overrides(get_config(), args)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    configure_logging(config.observability, level=args.log_level)
    planner: RoutePlannerService = Container.create_default(config).resolve(
        RoutePlannerService
    )

    try:
        planner.ledger_repository.load()
    except LedgerLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.list_airports:
        for airport in planner.list_airports():
            code = f" ({airport.code})" if airport.code else ""
            print(f"{airport.key}{code}")
        return 0

    origin = _pick_origin(planner, args)
    if origin is None:
        print("Error: no known origin airport", file=sys.stderr)
        return 1

    print(f"From {origin.key}")
    blocks: List[DestinationOptions]
    if args.destination:
        single = _single_destination(planner, origin, args)
        if single is None:
            print(f"Error: unknown destination {args.destination!r}", file=sys.stderr)
            return 1
        blocks = [single]
    else:
        blocks = planner.plan_destinations(origin.key)

    for options in blocks:
        print(format_options(options, show_legs=args.legs))
    return 0


if __name__ == "__main__":
    sys.exit(main())
