"""Tests for the JSON Lines ledger repository."""

import json
import logging

import pytest

from flightpaths.adapters.ledger import JsonlLedgerRepository
from flightpaths.config import LedgerConfig
from flightpaths.domain.errors import AirportNotFoundError, LedgerLoadError
from flightpaths.domain.models import Month
from flightpaths.ledger.reconciler import resolve

from ..helpers import airline_json, destination_json, service_json, write_jsonl

POP = destination_json(
    "Puerto Plata",
    "Dominican Republic",
    [
        service_json("Toronto", "Canada", 255, code="YYZ", coords="43.6777, -79.6248"),
        service_json("Calgary", "Canada", 330, code="YYC", coords="51.1215, -114.0076"),
    ],
    code="POP",
    coords="19.7579, -70.5700",
)
YYZ = destination_json(
    "Toronto",
    "Canada",
    [service_json("Calgary", "Canada", 235, code="YYC")],
    code="YYZ",
    coords="43.6777, -79.6248",
)


@pytest.fixture
def flights_file(tmp_path):
    return tmp_path / "flights.jsonl"


def _repository(path, **overrides):
    config = LedgerConfig(data_dir=path.parent, flights_file=path.name, **overrides)
    return JsonlLedgerRepository(config)


def test_loads_grouped_records(flights_file):
    write_jsonl(flights_file, [POP, YYZ])

    ledger = _repository(flights_file).load()

    assert len(ledger) == 3
    assert {a.code for a in ledger.airports()} == {"POP", "YYZ", "YYC"}
    pop = ledger.lookup("POP")
    assert pop.location.latitude == pytest.approx(19.7579)
    assert {a.city for a in ledger.reachable_set(pop)} == {"Toronto", "Calgary"}


def test_load_is_cached_until_reload(flights_file):
    write_jsonl(flights_file, [POP])
    repository = _repository(flights_file)

    first = repository.load()
    assert repository.load() is first

    write_jsonl(flights_file, [POP, YYZ])
    reloaded = repository.reload()

    assert reloaded is not first
    assert len(reloaded) == 3
    assert repository.load() is reloaded


def test_malformed_lines_are_skipped(flights_file, caplog):
    write_jsonl(flights_file, [POP, "{not json", "[1, 2]", {"destination_city_name": ""}, "", YYZ])

    with caplog.at_level(logging.WARNING):
        ledger = _repository(flights_file).load()

    assert len(ledger) == 3
    skipped = [r for r in caplog.records if r.getMessage().startswith("Skipping malformed entry")]
    assert [r.reason for r in skipped] == ["invalid_json", "not_an_object", "invalid_record"]
    assert [r.line for r in skipped] == [2, 3, 4]
    assert "at line 2 (invalid_json)" in skipped[0].getMessage()


def test_bad_service_does_not_sink_its_siblings(flights_file, caplog):
    record = destination_json(
        "Punta Cana",
        "Dominican Republic",
        [
            service_json("Miami", "USA", 140),
            service_json("Paris", "France", -5),
            service_json("Madrid", "Spain", 500, airlines=[airline_json("Iberia", days=9)]),
            service_json("Punta Cana", "Dominican Republic", 30),
            service_json("Boston", "USA", 250, coords="123, 456"),
            "not a service",
        ],
    )
    write_jsonl(flights_file, [record])

    with caplog.at_level(logging.WARNING):
        ledger = _repository(flights_file).load()

    assert [e.origin.city for e in ledger.edges] == ["Miami"]
    assert len([r for r in caplog.records if r.getMessage().startswith("Skipping malformed service")]) == 5


def test_flat_records(flights_file):
    flat = dict(service_json("Miami", "USA", 120, code="MIA"))
    flat.update(
        destination_city_name="Santiago",
        destination_country="Dominican Republic",
        destination_airport_iata="STI",
    )
    write_jsonl(flights_file, [flat])

    ledger = _repository(flights_file).load()

    assert len(ledger) == 1
    assert ledger.edges[0].destination.code == "STI"
    assert ledger.edges[0].line_number == 1


def test_airline_fields_are_parsed(flights_file):
    record = destination_json(
        "Santo Domingo",
        "Dominican Republic",
        [
            service_json(
                "Madrid",
                "Spain",
                540,
                airlines=[
                    airline_json("Iberia", "january", "December", 7),
                    airline_json("Air Europa", "Nov", "Apr", 3),
                    airline_json("Air Europa", "Dec", "Mar", 5),
                ],
            )
        ],
    )
    write_jsonl(flights_file, [record])

    (edge,) = _repository(flights_file).load().edges

    iberia, air_europa = edge.airlines
    assert iberia.is_year_round
    assert iberia.status == "active"
    assert air_europa.season_start is Month.DEC
    assert air_europa.season_end is Month.MAR
    assert air_europa.days_per_week == 3


def test_missing_file_raises_load_error(tmp_path):
    repository = _repository(tmp_path / "missing.jsonl")

    with pytest.raises(LedgerLoadError) as excinfo:
        repository.load()

    assert excinfo.value.file_path.endswith("missing.jsonl")
    assert isinstance(excinfo.value.cause, OSError)


def test_undecodable_line_is_skipped(flights_file, caplog):
    write_jsonl(flights_file, [POP])
    with flights_file.open("ab") as f:
        f.write(b'{"destination_city_name": "\xff\xfe"}\n')

    with caplog.at_level(logging.WARNING):
        ledger = _repository(flights_file).load()

    assert len(ledger) == 2
    (skipped,) = [r for r in caplog.records if r.getMessage().startswith("Skipping malformed entry")]
    assert skipped.reason == "invalid_encoding"
    assert "at line 2 (invalid_encoding)" in skipped.getMessage()


def test_byte_order_mark_is_ignored(flights_file):
    flights_file.write_bytes(b"\xef\xbb\xbf" + json.dumps(YYZ).encode("utf-8") + b"\n")

    assert len(_repository(flights_file).load()) == 1


def test_failed_reload_keeps_previous_snapshot(flights_file):
    write_jsonl(flights_file, [POP])
    repository = _repository(flights_file)
    ledger = repository.load()

    flights_file.unlink()
    with pytest.raises(LedgerLoadError):
        repository.reload()

    assert repository.load() is ledger


def test_consolidation_option_merges_duplicates(flights_file):
    reverse = destination_json(
        "Toronto", "Canada", [service_json("Puerto Plata", "Dominican Republic", 280)]
    )
    write_jsonl(flights_file, [POP, reverse])

    raw = _repository(flights_file).load()
    merged = _repository(flights_file, consolidate_duplicates=True).load()

    assert len(raw) == 3
    assert len(merged) == 2
    pop, yyz = "Puerto Plata, Dominican Republic", "Toronto, Canada"
    assert resolve(merged, pop, yyz).duration_minutes == 280
    assert resolve(raw, pop, yyz).duration_minutes == 280


def test_airport_lookups(flights_file):
    write_jsonl(flights_file, [POP])
    repository = _repository(flights_file)

    assert repository.get_airport("puerto plata, dominican republic").code == "POP"
    assert repository.get_airport("XXX") is None
    assert [a.city for a in repository.list_airports()] == ["Calgary", "Puerto Plata", "Toronto"]
    with pytest.raises(AirportNotFoundError):
        repository.get_airport_or_raise("XXX")


def test_bundled_data_loads_cleanly(caplog):
    with caplog.at_level(logging.WARNING):
        ledger = JsonlLedgerRepository().load()

    assert not caplog.records
    assert {"POP", "STI", "SDQ", "PUJ"} <= {a.code for a in ledger.airports()}
