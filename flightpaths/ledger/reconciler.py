"""Bidirectional service reconciliation.

A pair of airports may be described by zero, one or several raw edges,
stored from either airport's perspective. ``resolve`` folds all of them
into one composite ServiceLeg oriented for the requested direction.

Conflicting descriptions are merged conservatively: the longest
duration, the fewest operating days, and the narrowest season window.
Season months are compared by calendar index; a window that wraps
around the new year is not special-cased.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..domain.models import AirlineService, Month, RawEdge, ServiceLeg
from .ledger import AirportRef, FlightLedger

logger = logging.getLogger(__name__)


def merge_airline(existing: AirlineService, incoming: AirlineService) -> AirlineService:
    """Combine two descriptions of the same airline, keeping the rarer service."""
    return replace(
        existing,
        days_per_week=min(existing.days_per_week, incoming.days_per_week),
        season_start=max(existing.season_start, incoming.season_start, key=_month_index),
        season_end=min(existing.season_end, incoming.season_end, key=_month_index),
    )


def merge_airlines(*groups: Iterable[AirlineService]) -> Tuple[AirlineService, ...]:
    """Union of airline lists keyed by name, first-seen order preserved."""
    merged: Dict[str, AirlineService] = {}
    for group in groups:
        for airline in group:
            existing = merged.get(airline.name)
            merged[airline.name] = (
                airline if existing is None else merge_airline(existing, airline)
            )
    return tuple(merged.values())


def _month_index(month: Month) -> int:
    return month.value


def _fold(edges: Sequence[RawEdge]) -> Tuple[int, Tuple[AirlineService, ...]]:
    duration = max(edge.duration_minutes for edge in edges)
    airlines = merge_airlines(*(edge.airlines for edge in edges))
    return duration, airlines


def resolve(
    ledger: FlightLedger,
    origin: AirportRef,
    destination: AirportRef,
) -> Optional[ServiceLeg]:
    """Build the composite leg from ``origin`` to ``destination``.

    Edges are folded in ledger load order whatever the requested
    direction, so ``resolve(a, b)`` and ``resolve(b, a)`` report the
    same duration and the same airline tuple. Both endpoints carry the
    ledger's canonical metadata, never the copy found in a reversed
    record.

    Returns:
        The reconciled leg, or None if the pair has no stored service.
    """
    source = ledger.airport(origin)
    target = ledger.airport(destination)
    if source is None or target is None or source == target:
        return None

    edges = ledger.edges_for_pair(source, target)
    if not edges:
        return None

    duration, airlines = _fold(edges)
    return ServiceLeg(
        origin=source,
        destination=target,
        duration_minutes=duration,
        airlines=airlines,
    )


def consolidate_edges(edges: Iterable[RawEdge]) -> List[RawEdge]:
    """Collapse every group of edges describing the same airport pair.

    Optional pass run before the ledger is built. Each pair keeps a
    single edge oriented like its first-seen record, merged with the
    same policy as ``resolve``.
    """
    groups: Dict[frozenset[str], List[RawEdge]] = {}
    for edge in edges:
        pair = frozenset((edge.origin.normalized_key, edge.destination.normalized_key))
        groups.setdefault(pair, []).append(edge)

    consolidated: List[RawEdge] = []
    for group in groups.values():
        first = group[0]
        if len(group) == 1:
            consolidated.append(first)
            continue

        duration, airlines = _fold(group)
        logger.debug(
            "Merged duplicate edges",
            extra={
                "pair": f"{first.origin.key} <-> {first.destination.key}",
                "records": len(group),
                "lines": [edge.line_number for edge in group],
            },
        )
        consolidated.append(
            replace(first, duration_minutes=duration, airlines=airlines)
        )
    return consolidated
