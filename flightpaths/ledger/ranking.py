"""Ordering and truncation of route candidates."""

from __future__ import annotations

from operator import attrgetter
from typing import Iterable, List

from ..domain.models import RouteCandidate, RouteKind

DEFAULT_MAX_RESULTS = 30

_by_efficiency = attrgetter("efficiency_ratio")


def rank_routes(
    candidates: Iterable[RouteCandidate],
    limit: int = DEFAULT_MAX_RESULTS,
) -> List[RouteCandidate]:
    """Direct routes first, then connections, each by ascending efficiency ratio.

    Sorting is stable: ties keep their enumeration order.

    Raises:
        ValueError: If limit is lower than 1.
    """
    if limit < 1:
        raise ValueError(f"limit must be at least 1, got {limit}")

    candidates = list(candidates)
    direct = sorted(
        (c for c in candidates if c.kind is RouteKind.DIRECT), key=_by_efficiency
    )
    connecting = sorted(
        (c for c in candidates if c.kind is RouteKind.CONNECTING), key=_by_efficiency
    )
    return (direct + connecting)[:limit]
