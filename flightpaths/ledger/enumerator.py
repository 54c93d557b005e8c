"""Route enumeration between two airports.

The default search only looks at the direct edge and at one-stop
connections through airports that both ends can reach. An airport that
is not a neighbour of both the origin and the destination is never a
transfer, even if a longer chain would link them. ``enumerate_multi_hop``
is the separate, bounded breadth-first entry point for longer chains.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List, Optional, Set, Tuple

from ..domain.models import Airport, RouteCandidate, ServiceLeg
from .ledger import AirportRef, FlightLedger
from .reconciler import resolve
from .scoring import score_route

logger = logging.getLogger(__name__)

DEFAULT_MAX_LEGS = 3


def transfer_candidates(
    ledger: FlightLedger,
    origin: AirportRef,
    destination: AirportRef,
) -> List[Airport]:
    """Airports reachable from both ends, excluding the ends themselves.

    Sorted by key so that enumeration order is stable.
    """
    source = ledger.airport(origin)
    target = ledger.airport(destination)
    if source is None or target is None:
        return []

    shared = ledger.reachable_set(source) & ledger.reachable_set(target)
    shared = shared - {source, target}
    return sorted(shared, key=lambda airport: airport.key)


def _resolve_endpoints(
    ledger: FlightLedger,
    origin: AirportRef,
    destination: AirportRef,
) -> Optional[Tuple[Airport, Airport]]:
    source = ledger.airport(origin)
    target = ledger.airport(destination)
    if source is None or target is None or source == target:
        return None
    return source, target


def enumerate_routes(
    ledger: FlightLedger,
    origin: AirportRef,
    destination: AirportRef,
) -> List[RouteCandidate]:
    """Direct and one-stop candidates from origin to destination, unranked.

    Connecting candidates that share the same transfer city and total
    duration are collapsed, keeping the first one encountered.
    """
    endpoints = _resolve_endpoints(ledger, origin, destination)
    if endpoints is None:
        return []
    source, target = endpoints

    candidates: List[RouteCandidate] = []

    direct = resolve(ledger, source, target)
    if direct is not None:
        candidates.append(score_route((direct,)))

    seen: Set[Tuple[str, int]] = set()
    for transfer in transfer_candidates(ledger, source, target):
        first = resolve(ledger, source, transfer)
        second = resolve(ledger, transfer, target)
        if first is None or second is None:
            continue

        candidate = score_route((first, second), via=transfer)
        signature = (transfer.city, candidate.duration_minutes)
        if signature in seen:
            logger.debug(
                "Skipping duplicate connection",
                extra={"via": transfer.key, "duration": candidate.duration_minutes},
            )
            continue
        seen.add(signature)
        candidates.append(candidate)

    return candidates


def enumerate_multi_hop(
    ledger: FlightLedger,
    origin: AirportRef,
    destination: AirportRef,
    max_legs: int = DEFAULT_MAX_LEGS,
) -> List[RouteCandidate]:
    """Breadth-first search for routes of up to ``max_legs`` legs.

    Paths never revisit an airport. Candidates come out in order of leg
    count, and among equal counts in neighbour key order; candidates
    with the same transfer cities and total duration are collapsed.

    Raises:
        ValueError: If max_legs is lower than 1.
    """
    if max_legs < 1:
        raise ValueError(f"max_legs must be at least 1, got {max_legs}")

    endpoints = _resolve_endpoints(ledger, origin, destination)
    if endpoints is None:
        return []
    source, target = endpoints

    candidates: List[RouteCandidate] = []
    seen: Set[Tuple[Tuple[str, ...], int]] = set()

    def complete(path: Tuple[Airport, ...]) -> None:
        legs = _legs_along(ledger, path)
        if legs is None:
            return
        candidate = score_route(legs)
        signature = (
            tuple(airport.city for airport in candidate.transfers),
            candidate.duration_minutes,
        )
        if signature not in seen:
            seen.add(signature)
            candidates.append(candidate)

    queue: Deque[Tuple[Airport, ...]] = deque([(source,)])
    while queue:
        path = queue.popleft()

        # One leg left: only a hop straight to the target can finish the path.
        if len(path) == max_legs:
            if ledger.edges_for_pair(path[-1], target):
                complete(path + (target,))
            continue

        neighbours = sorted(ledger.reachable_set(path[-1]), key=lambda a: a.key)
        for neighbour in neighbours:
            if neighbour in path:
                continue
            if neighbour == target:
                complete(path + (target,))
            else:
                queue.append(path + (neighbour,))

    logger.debug(
        "Multi-hop search finished",
        extra={
            "origin": source.key,
            "destination": target.key,
            "max_legs": max_legs,
            "candidates": len(candidates),
        },
    )
    return candidates


def _legs_along(
    ledger: FlightLedger, path: Tuple[Airport, ...]
) -> Optional[Tuple[ServiceLeg, ...]]:
    legs: List[ServiceLeg] = []
    for start, end in zip(path, path[1:]):
        leg = resolve(ledger, start, end)
        if leg is None:
            return None
        legs.append(leg)
    return tuple(legs)
