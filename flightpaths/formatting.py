"""Plain-text rendering of route candidates for the CLI."""

from __future__ import annotations

from typing import List

from .domain.models import AirlineService, DestinationOptions, RouteCandidate, ServiceLeg


def format_duration(minutes: int) -> str:
    """'45m', '2h' or '2h 5m'."""
    hours, mins = divmod(int(minutes), 60)
    if hours == 0:
        return f"{mins}m"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}m"


def format_frequency(days_per_week: int) -> str:
    return "Daily" if days_per_week == 7 else f"{days_per_week}/week"


def format_season(airline: AirlineService) -> str:
    if airline.is_year_round:
        return "Year-round"
    return f"{airline.season_start.abbreviation} - {airline.season_end.abbreviation}"


def format_airline(airline: AirlineService) -> str:
    return f"{airline.name} ({format_season(airline)}, {format_frequency(airline.days_per_week)})"


def format_leg(leg: ServiceLeg) -> str:
    airlines = "; ".join(format_airline(airline) for airline in leg.airlines)
    line = f"{leg.origin.city} -> {leg.destination.city} {format_duration(leg.duration_minutes)}"
    return f"{line}: {airlines}" if airlines else line


def describe_route(route: RouteCandidate) -> str:
    """One-line summary: 'via Miami  5h 10m  volume 0.86  ratio 360.5'."""
    label = "Direct" if route.is_direct else f"via {route.via_label}"
    return (
        f"{label:<24} {format_duration(route.duration_minutes):>8}"
        f"  volume {route.volume_factor:.2f}  ratio {route.efficiency_ratio:.1f}"
    )


def format_options(options: DestinationOptions, show_legs: bool = False) -> str:
    """Block of text for one destination column."""
    destination = options.destination
    header = f"== {destination.airport.key}"
    if destination.ground_transfer_minutes:
        header += f" (+{format_duration(destination.ground_transfer_minutes)} ground transfer)"

    lines: List[str] = [header]
    if options.is_empty:
        lines.append("   no routes")
        return "\n".join(lines)

    for position, route in enumerate(options.routes, start=1):
        door_to_door = format_duration(options.door_to_door_minutes(route))
        lines.append(f"{position:>3}. {describe_route(route)}  door-to-door {door_to_door}")
        if show_legs:
            lines.extend(f"       {format_leg(leg)}" for leg in route.legs)
    return "\n".join(lines)
