"""Route planner service - Query façade for the UI layer.

The planner holds a ledger repository and answers route queries
against whatever snapshot the repository currently holds. Every query
is a pure function of (origin, destination, snapshot): unknown airports
and missing services produce empty results, never errors.
"""

from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from ..config import AppConfig, get_config
from ..domain.models import Airport, Destination, DestinationOptions, RouteCandidate
from ..ledger.enumerator import enumerate_multi_hop, enumerate_routes
from ..ledger.ledger import FlightLedger
from ..ledger.ranking import rank_routes
from ..ports.ledger import LedgerRepositoryPort

EARTH_RADIUS_KM = 6371.0


def _haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in km between two GPS coordinates."""
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


@dataclass
class RoutePlannerService:
    """Ranked travel options from a home airport to the fixed destinations.

    Attributes:
        ledger_repository: Source of the immutable ledger snapshot
        config: Application configuration (ranking limits, destinations)
    """

    ledger_repository: LedgerRepositoryPort
    config: AppConfig = field(default_factory=get_config)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def ledger(self) -> FlightLedger:
        """Current snapshot; loads it on first access.

        Raises:
            LedgerLoadError: If the first load fails.
        """
        return self.ledger_repository.load()

    def reload(self) -> FlightLedger:
        """Replace the ledger wholesale."""
        return self.ledger_repository.reload()

    def find_routes(self, origin_key: str, destination_key: str) -> List[RouteCandidate]:
        """Ranked direct and one-stop routes, at most ``max_results`` long.

        Args:
            origin_key: 'City, Country' or IATA code of the origin.
            destination_key: 'City, Country' or IATA code of the destination.

        Returns:
            Direct candidates first, then connections by efficiency.
            Empty if either airport is unknown or nothing connects them.
        """
        candidates = enumerate_routes(self.ledger, origin_key, destination_key)
        ranked = rank_routes(candidates, limit=self.config.ranking.max_results)
        self._logger.debug(
            "Routes found",
            extra={
                "origin": origin_key,
                "destination": destination_key,
                "candidates": len(candidates),
                "returned": len(ranked),
            },
        )
        return ranked

    def find_multi_hop_routes(
        self,
        origin_key: str,
        destination_key: str,
        max_legs: Optional[int] = None,
    ) -> List[RouteCandidate]:
        """Ranked routes with up to ``max_legs`` legs (default from config).

        Raises:
            ValueError: If max_legs is lower than 1.
        """
        if max_legs is None:
            max_legs = self.config.ranking.max_hops
        candidates = enumerate_multi_hop(
            self.ledger, origin_key, destination_key, max_legs=max_legs
        )
        return rank_routes(candidates, limit=self.config.ranking.max_results)

    def list_airports(self) -> Sequence[Airport]:
        """Every airport known to the ledger, sorted by key."""
        return self.ledger.airports()

    def destinations(self) -> List[Destination]:
        """Configured destinations, using ledger metadata where available."""
        ledger = self.ledger
        resolved = []
        for destination in self.config.destination_list():
            airport = ledger.airport(destination.airport) or destination.airport
            resolved.append(
                Destination(
                    airport=airport,
                    ground_transfer_minutes=destination.ground_transfer_minutes,
                )
            )
        return resolved

    def list_origins(self) -> List[Airport]:
        """Airports a trip can start from: all but the fixed destinations."""
        excluded = {destination.airport for destination in self.config.destination_list()}
        return [airport for airport in self.list_airports() if airport not in excluded]

    def plan_destinations(self, origin_key: str) -> List[DestinationOptions]:
        """Ranked options from one origin to every configured destination.

        Destinations are independent of each other. With
        ``parallel_destinations`` enabled they are computed in a thread
        pool; the result keeps the configured destination order either way.
        """
        destinations = self.destinations()
        ranking = self.config.ranking

        def plan(destination: Destination) -> DestinationOptions:
            routes = self.find_routes(origin_key, destination.airport.key)
            return DestinationOptions(destination=destination, routes=tuple(routes))

        if ranking.parallel_destinations and len(destinations) > 1:
            # Load before fanning out so workers share one snapshot.
            _ = self.ledger
            with ThreadPoolExecutor(max_workers=ranking.max_workers) as executor:
                options = list(executor.map(plan, destinations))
        else:
            options = [plan(destination) for destination in destinations]

        self._logger.info(
            "Destinations planned",
            extra={
                "origin": origin_key,
                "routes": {o.destination.airport.city: len(o.routes) for o in options},
            },
        )
        return options

    def best_option(
        self, origin_key: str
    ) -> Optional[Tuple[DestinationOptions, RouteCandidate]]:
        """Top route of the first destination, in configured order, that has any."""
        for options in self.plan_destinations(origin_key):
            if options.best is not None:
                return options, options.best
        return None

    def nearest_airport(
        self,
        latitude: float,
        longitude: float,
        max_distance_km: Optional[float] = None,
        candidates: Optional[Iterable[Airport]] = None,
    ) -> Optional[Airport]:
        """Closest airport with known coordinates within a radius.

        Args:
            latitude: Latitude of the user.
            longitude: Longitude of the user.
            max_distance_km: Search radius, defaults to the configured one.
            candidates: Airports to consider, defaults to ``list_origins()``.

        Returns:
            The nearest airport, or None if none lies within the radius.
        """
        radius = max_distance_km
        if radius is None:
            radius = self.config.ranking.nearest_airport_radius_km
        pool = self.list_origins() if candidates is None else candidates

        nearest: Optional[Airport] = None
        min_distance = float("inf")
        for airport in pool:
            if airport.location is None:
                continue
            distance = _haversine_distance(
                latitude,
                longitude,
                airport.location.latitude,
                airport.location.longitude,
            )
            if distance < min_distance:
                min_distance = distance
                nearest = airport

        if nearest is None or min_distance >= radius:
            return None
        return nearest

    def default_origin(self, preferred: Optional[Sequence[str]] = None) -> Optional[Airport]:
        """First preferred origin present in the ledger."""
        for key in preferred or self.config.default_origins:
            airport = self.ledger.lookup(key)
            if airport is not None:
                return airport
        return None
