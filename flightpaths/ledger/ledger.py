"""Immutable snapshot of the loaded service records.

The raw data is direction-biased: a pair may be stored from either
airport's perspective, or from both. For reachability the ledger treats
every stored edge as undirected, through an adjacency index keyed by
normalized airport identity and built once at construction.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple, Union

from ..domain.models import Airport, RawEdge, normalize_key

AirportRef = Union[Airport, str]


class FlightLedger:
    """Read-only collection of raw edges with lookup indexes.

    Canonical airport metadata: the first record that describes an
    airport as a destination wins; an airport only ever seen as an
    origin keeps its first-seen metadata.
    """

    __slots__ = ("_edges", "_airports", "_codes", "_adjacency", "_incident", "_directed")

    def __init__(self, edges: Iterable[RawEdge] = ()) -> None:
        self._edges: Tuple[RawEdge, ...] = tuple(edges)

        as_destination: Dict[str, Airport] = {}
        as_origin: Dict[str, Airport] = {}
        adjacency: Dict[str, Set[str]] = {}
        incident: Dict[str, List[int]] = {}
        directed: Dict[Tuple[str, str], List[int]] = {}

        for index, edge in enumerate(self._edges):
            origin_key = edge.origin.normalized_key
            destination_key = edge.destination.normalized_key

            as_destination.setdefault(destination_key, edge.destination)
            as_origin.setdefault(origin_key, edge.origin)

            adjacency.setdefault(origin_key, set()).add(destination_key)
            adjacency.setdefault(destination_key, set()).add(origin_key)
            incident.setdefault(origin_key, []).append(index)
            incident.setdefault(destination_key, []).append(index)
            directed.setdefault((origin_key, destination_key), []).append(index)

        airports = dict(as_origin)
        airports.update(as_destination)

        codes: Dict[str, str] = {}
        for key, airport in airports.items():
            if airport.code:
                codes.setdefault(airport.code.strip().upper(), key)

        self._airports: Mapping[str, Airport] = MappingProxyType(airports)
        self._codes: Mapping[str, str] = MappingProxyType(codes)
        self._adjacency: Mapping[str, frozenset[str]] = MappingProxyType(
            {key: frozenset(neighbours) for key, neighbours in adjacency.items()}
        )
        self._incident: Mapping[str, Tuple[int, ...]] = MappingProxyType(
            {key: tuple(indexes) for key, indexes in incident.items()}
        )
        self._directed: Mapping[Tuple[str, str], Tuple[int, ...]] = MappingProxyType(
            {pair: tuple(indexes) for pair, indexes in directed.items()}
        )

    def __len__(self) -> int:
        return len(self._edges)

    def __repr__(self) -> str:
        return f"FlightLedger(edges={len(self._edges)}, airports={len(self._airports)})"

    @property
    def edges(self) -> Tuple[RawEdge, ...]:
        """All raw edges in load order."""
        return self._edges

    @property
    def is_empty(self) -> bool:
        return not self._edges

    def airports(self) -> Tuple[Airport, ...]:
        """Every known airport, sorted by display key."""
        return tuple(sorted(self._airports.values(), key=lambda a: a.key))

    def lookup(self, query: str) -> Optional[Airport]:
        """Find an airport by 'City, Country' (any case/spacing) or IATA code.

        Returns:
            The canonical Airport, or None if unknown.
        """
        key = normalize_key(query)
        airport = self._airports.get(key)
        if airport is not None:
            return airport
        code_key = self._codes.get(query.strip().upper())
        if code_key is not None:
            return self._airports[code_key]
        return None

    def airport(self, ref: AirportRef) -> Optional[Airport]:
        """Return the canonical instance for an airport or a lookup string."""
        if isinstance(ref, Airport):
            return self._airports.get(ref.normalized_key)
        return self.lookup(ref)

    def __contains__(self, ref: object) -> bool:
        if not isinstance(ref, (Airport, str)):
            return False
        return self.airport(ref) is not None

    def edges_involving(self, ref: AirportRef) -> Set[Tuple[Airport, RawEdge]]:
        """Pairs of (other endpoint, raw edge) for every edge touching an airport.

        The airport may sit on either side of the stored edge. Unknown
        airports yield an empty set.
        """
        airport = self.airport(ref)
        if airport is None:
            return set()
        result: Set[Tuple[Airport, RawEdge]] = set()
        for index in self._incident.get(airport.normalized_key, ()):
            edge = self._edges[index]
            other = edge.other_end(airport)
            result.add((self._airports[other.normalized_key], edge))
        return result

    def reachable_set(self, ref: AirportRef) -> frozenset[Airport]:
        """Airports with a stored service to or from ``ref``, in either direction."""
        airport = self.airport(ref)
        if airport is None:
            return frozenset()
        neighbours = self._adjacency.get(airport.normalized_key, frozenset())
        return frozenset(self._airports[key] for key in neighbours)

    def edges_between(self, origin: AirportRef, destination: AirportRef) -> Tuple[RawEdge, ...]:
        """Raw edges stored exactly in the origin -> destination orientation."""
        source = self.airport(origin)
        target = self.airport(destination)
        if source is None or target is None:
            return ()
        indexes = self._directed.get((source.normalized_key, target.normalized_key), ())
        return tuple(self._edges[index] for index in indexes)

    def edges_for_pair(self, first: AirportRef, second: AirportRef) -> Tuple[RawEdge, ...]:
        """Raw edges between two airports in either orientation, in load order."""
        a = self.airport(first)
        b = self.airport(second)
        if a is None or b is None:
            return ()
        forward = self._directed.get((a.normalized_key, b.normalized_key), ())
        backward = self._directed.get((b.normalized_key, a.normalized_key), ())
        return tuple(self._edges[index] for index in sorted(forward + backward))
