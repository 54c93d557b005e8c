from __future__ import annotations

import pytest

from flightpaths.config import reset_config
from flightpaths.ledger.ledger import FlightLedger

from .helpers import airport, edge


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def chain_ledger() -> FlightLedger:
    """A -> B (90 min) and B -> C (120 min), no A-C edge."""
    a = airport("Alpha", code="AAA")
    b = airport("Bravo", code="BBB")
    c = airport("Charlie", code="CCC")
    return FlightLedger([edge(a, b, 90), edge(b, c, 120)])
