"""Builders shared by the test modules."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from flightpaths.domain.models import AirlineService, Airport, GeoLocation, Month, RawEdge


def airport(
    city: str,
    country: str = "Testland",
    code: Optional[str] = None,
    lat: Optional[float] = None,
    lon: Optional[float] = None,
) -> Airport:
    location = GeoLocation(lat, lon) if lat is not None and lon is not None else None
    return Airport(city=city, country=country, code=code, location=location)


def daily(name: str = "Test Air") -> AirlineService:
    """Year-round, seven days a week."""
    return AirlineService(name, Month.JAN, Month.DEC, 7)


def service(
    name: str,
    start: Month = Month.JAN,
    end: Month = Month.DEC,
    days: int = 7,
    status: Optional[str] = "active",
) -> AirlineService:
    return AirlineService(name, start, end, days, status)


def edge(
    origin: Airport,
    destination: Airport,
    minutes: int,
    *airlines: AirlineService,
    line: int = 0,
) -> RawEdge:
    return RawEdge(
        origin=origin,
        destination=destination,
        duration_minutes=minutes,
        airlines=airlines or (daily(),),
        line_number=line,
    )


def airline_json(
    name: str, start: str = "Jan", end: str = "Dec", days: int = 7
) -> Dict[str, Any]:
    return {
        "airline_name": name,
        "service_start_month": start,
        "service_end_month": end,
        "days_per_week": days,
        "status": "active",
    }


def service_json(
    city: str,
    country: str,
    minutes: int,
    code: Optional[str] = None,
    coords: Optional[str] = None,
    airlines: Optional[Iterable[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    return {
        "origin_city_name": city,
        "origin_country": country,
        "origin_airport_iata": code,
        "origin_airport_coordinates": coords,
        "flight_duration_minutes": minutes,
        "airlines": list(airlines) if airlines is not None else [airline_json("Test Air")],
    }


def destination_json(
    city: str,
    country: str,
    services: Iterable[Dict[str, Any]],
    code: Optional[str] = None,
    coords: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "destination_city_name": city,
        "destination_country": country,
        "destination_airport_iata": code,
        "destination_airport_coordinates": coords,
        "direct_services": list(services),
    }


def write_jsonl(path: Path, entries: Iterable[Any]) -> Path:
    """Write entries one per line; strings are written verbatim."""
    lines = [entry if isinstance(entry, str) else json.dumps(entry) for entry in entries]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
