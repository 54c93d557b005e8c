"""Tests for the route planner service."""

from dataclasses import dataclass, field
from typing import Optional

import pytest

from flightpaths.config import AppConfig, DestinationSettings, RankingConfig
from flightpaths.domain.models import Airport, RouteKind
from flightpaths.ledger.ledger import FlightLedger
from flightpaths.services import RoutePlannerService

from .helpers import airport, daily, edge

TORONTO = airport("Toronto", "Canada", code="YYZ", lat=43.6777, lon=-79.6248)
CALGARY = airport("Calgary", "Canada", code="YYC", lat=51.1215, lon=-114.0076)
MIAMI = airport("Miami", "USA", code="MIA", lat=25.7959, lon=-80.2870)
PUERTO_PLATA = airport("Puerto Plata", "Dominican Republic", code="POP", lat=19.7579, lon=-70.57)
PUNTA_CANA = airport("Punta Cana", "Dominican Republic", code="PUJ", lat=18.5601, lon=-68.3725)


def _ledger() -> FlightLedger:
    return FlightLedger(
        [
            edge(TORONTO, PUERTO_PLATA, 255, daily("WestJet")),
            edge(CALGARY, PUERTO_PLATA, 330, daily("WestJet")),
            edge(CALGARY, TORONTO, 235, daily("Air Canada")),
            edge(MIAMI, PUNTA_CANA, 140, daily("American")),
            edge(TORONTO, MIAMI, 180, daily("Air Canada")),
        ]
    )


@dataclass
class StaticLedgerRepository:
    """In-memory repository serving prepared snapshots."""

    ledger: FlightLedger
    next_ledger: Optional[FlightLedger] = None
    loads: int = field(default=0)

    def load(self) -> FlightLedger:
        self.loads += 1
        return self.ledger

    def reload(self) -> FlightLedger:
        if self.next_ledger is not None:
            self.ledger = self.next_ledger
        return self.ledger

    def get_airport(self, key: str) -> Optional[Airport]:
        return self.ledger.lookup(key)

    def list_airports(self):
        return list(self.ledger.airports())


def _config(**ranking) -> AppConfig:
    return AppConfig(
        ranking=RankingConfig(**ranking),
        destinations=[
            DestinationSettings(
                city="Puerto Plata", country="Dominican Republic", ground_transfer_minutes=50
            ),
            DestinationSettings(
                city="Punta Cana", country="Dominican Republic", ground_transfer_minutes=329
            ),
        ],
        default_origins=["New York, USA", "Miami, USA", "Toronto, Canada"],
    )


@pytest.fixture
def planner() -> RoutePlannerService:
    return RoutePlannerService(StaticLedgerRepository(_ledger()), config=_config())


def test_find_routes_direct_and_connecting(planner):
    routes = planner.find_routes("Calgary, Canada", "POP")

    assert [route.kind for route in routes] == [RouteKind.DIRECT, RouteKind.CONNECTING]
    assert routes[0].duration_minutes == 330
    assert routes[1].via == TORONTO
    assert routes[1].duration_minutes == 235 + 255


def test_find_routes_unknown_airports_are_empty(planner):
    assert planner.find_routes("Nowhere, Atlantis", "POP") == []
    assert planner.find_routes("YYZ", "ZZZ") == []


def test_find_routes_respects_max_results():
    planner = RoutePlannerService(StaticLedgerRepository(_ledger()), config=_config(max_results=1))

    routes = planner.find_routes("YYC", "POP")

    assert len(routes) == 1
    assert routes[0].is_direct


def test_plan_destinations_keeps_configured_order(planner):
    options = planner.plan_destinations("Toronto, Canada")

    assert [o.destination.airport.city for o in options] == ["Puerto Plata", "Punta Cana"]
    pop, puj = options
    assert pop.best.is_direct
    assert pop.door_to_door_minutes(pop.best) == 255 + 50
    assert puj.best.via_label == "Miami"
    assert puj.door_to_door_minutes(puj.best) == 180 + 140 + 329


def test_plan_destinations_with_no_routes(planner):
    options = planner.plan_destinations("Calgary, Canada")

    assert not options[0].is_empty
    assert options[1].is_empty
    assert options[1].best is None


def test_parallel_planning_matches_sequential():
    sequential = RoutePlannerService(StaticLedgerRepository(_ledger()), config=_config())
    parallel = RoutePlannerService(
        StaticLedgerRepository(_ledger()),
        config=_config(parallel_destinations=True, max_workers=2),
    )

    for origin in ("Toronto, Canada", "Calgary, Canada", "Miami, USA"):
        assert parallel.plan_destinations(origin) == sequential.plan_destinations(origin)


def test_destinations_take_ledger_metadata(planner):
    destinations = planner.destinations()

    assert [d.airport.code for d in destinations] == ["POP", "PUJ"]
    assert destinations[0].ground_transfer_minutes == 50


def test_best_option_picks_first_destination_with_routes(planner):
    options, route = planner.best_option("Miami, USA")

    assert options.destination.airport.city == "Puerto Plata"
    assert route.via_label == "Toronto"

    assert planner.best_option("Nowhere, Atlantis") is None


def test_list_origins_excludes_destinations(planner):
    assert [a.city for a in planner.list_origins()] == ["Calgary", "Miami", "Toronto"]
    assert len(planner.list_airports()) == 5


def test_nearest_airport(planner):
    assert planner.nearest_airport(43.65, -79.38) == TORONTO
    assert planner.nearest_airport(51.0, -114.0) == CALGARY
    assert planner.nearest_airport(0.0, 0.0) is None


def test_nearest_airport_pool_and_radius(planner):
    # Puerto Plata is a destination, so it is not a starting point.
    assert planner.nearest_airport(19.76, -70.57) is None
    assert planner.nearest_airport(19.76, -70.57, candidates=planner.list_airports()) == PUERTO_PLATA
    assert planner.nearest_airport(43.0, -79.0, max_distance_km=10) is None


def test_default_origin(planner):
    assert planner.default_origin() == MIAMI
    assert planner.default_origin(["Calgary, Canada"]) == CALGARY
    assert planner.default_origin(["Nowhere, Atlantis"]) is None


def test_multi_hop_routes(planner):
    assert planner.find_routes("Calgary, Canada", "Punta Cana, Dominican Republic") == []
    assert planner.find_multi_hop_routes("YYC", "PUJ", max_legs=2) == []

    routes = planner.find_multi_hop_routes("YYC", "PUJ")

    assert len(routes) == 1
    assert len(planner.find_multi_hop_routes("YYC", "PUJ", max_legs=4)) == 2
    assert routes[0].via_label == "Toronto / Miami"
    assert routes[0].duration_minutes == 235 + 180 + 140


def test_reload_swaps_snapshot():
    repository = StaticLedgerRepository(
        _ledger(), next_ledger=FlightLedger([edge(CALGARY, PUNTA_CANA, 400)])
    )
    planner = RoutePlannerService(repository, config=_config())
    assert planner.find_routes("YYC", "PUJ") == []

    planner.reload()

    routes = planner.find_routes("YYC", "PUJ")
    assert len(routes) == 1
    assert routes[0].is_direct


def test_zero_limits_are_not_defaults(planner):
    with pytest.raises(ValueError):
        planner.find_multi_hop_routes("YYC", "PUJ", max_legs=0)

    assert planner.nearest_airport(43.6777, -79.6248, max_distance_km=0) is None
