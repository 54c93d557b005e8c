"""Volume and efficiency scoring for route candidates.

Volume approximates how often and how year-round a leg operates.
Every airline contributes months active times days per week; the sum
is normalized by 84, so one daily, year-round airline scores exactly
1.0. Seasonal services count as 6 months whatever their actual window.
"""

from __future__ import annotations

from typing import Optional, Sequence

from ..domain.models import AirlineService, Airport, RouteCandidate, RouteKind, ServiceLeg

FULL_YEAR_MONTHS = 12
SEASONAL_MONTHS = 6
VOLUME_NORMALIZER = 84
VOLUME_FLOOR = 0.1


def months_active(airline: AirlineService) -> int:
    return FULL_YEAR_MONTHS if airline.is_year_round else SEASONAL_MONTHS


def segment_volume(leg: ServiceLeg) -> float:
    total = sum(months_active(airline) * airline.days_per_week for airline in leg.airlines)
    return total / VOLUME_NORMALIZER


def route_volume(legs: Sequence[ServiceLeg]) -> float:
    """Volume of a whole route.

    A single leg scores its own volume. Multi-leg routes take the
    average of the leg volumes weighted by each leg's share of the
    total flight time.
    """
    if not legs:
        raise ValueError("A route needs at least one leg")
    if len(legs) == 1:
        return segment_volume(legs[0])

    total_duration = sum(leg.duration_minutes for leg in legs)
    return sum(
        (leg.duration_minutes / total_duration) * segment_volume(leg) for leg in legs
    )


def volume_factor(volume: float) -> float:
    return max(volume, VOLUME_FLOOR)


def efficiency_ratio(duration_minutes: float, factor: float) -> float:
    """Minutes per unit of volume; lower is better."""
    return duration_minutes / factor


def score_route(
    legs: Sequence[ServiceLeg],
    via: Optional[Airport] = None,
) -> RouteCandidate:
    """Build a scored candidate from consecutive legs."""
    legs = tuple(legs)
    for previous, following in zip(legs, legs[1:]):
        if previous.destination != following.origin:
            raise ValueError(
                f"Legs do not connect: {previous.destination} != {following.origin}"
            )

    duration = sum(leg.duration_minutes for leg in legs)
    factor = volume_factor(route_volume(legs))
    kind = RouteKind.DIRECT if len(legs) == 1 else RouteKind.CONNECTING
    if kind is RouteKind.CONNECTING and via is None:
        via = legs[0].destination

    return RouteCandidate(
        kind=kind,
        legs=legs,
        duration_minutes=duration,
        volume_factor=factor,
        efficiency_ratio=efficiency_ratio(duration, factor),
        via=via,
    )
