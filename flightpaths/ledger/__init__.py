"""Route discovery engine over an in-memory flight ledger.

This subpackage holds the ledger snapshot and the pure functions that
reconcile stored services, enumerate direct and one-stop routes, score
them and rank them.
"""

from .enumerator import enumerate_multi_hop, enumerate_routes, transfer_candidates
from .ledger import FlightLedger
from .ranking import DEFAULT_MAX_RESULTS, rank_routes
from .reconciler import consolidate_edges, merge_airlines, resolve
from .scoring import route_volume, score_route, segment_volume

__all__ = [
    "FlightLedger",
    "resolve",
    "merge_airlines",
    "consolidate_edges",
    "transfer_candidates",
    "enumerate_routes",
    "enumerate_multi_hop",
    "segment_volume",
    "route_volume",
    "score_route",
    "rank_routes",
    "DEFAULT_MAX_RESULTS",
]
