"""Pydantic schemas for the flight data JSON Lines format.

Two line shapes are accepted. A grouped line describes one destination
airport and lists every service flying into it under
``direct_services``. A flat line carries a single service with both
airports inline. Each service becomes one raw edge, origin to
destination.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...domain.models import AirlineService, Airport, GeoLocation, Month, RawEdge
from ...ledger.reconciler import merge_airlines

Coordinates = Tuple[float, float]


def parse_coordinates(value: Any) -> Optional[Coordinates]:
    """Accept '19.75, -70.57', [19.75, -70.57] or None."""
    if value is None or value == "":
        return None
    if isinstance(value, str):
        parts = [part.strip() for part in value.split(",")]
        if len(parts) != 2:
            raise ValueError(f"Expected 'lat, lng', got {value!r}")
        latitude, longitude = float(parts[0]), float(parts[1])
    elif isinstance(value, (list, tuple)) and len(value) == 2:
        latitude, longitude = float(value[0]), float(value[1])
    else:
        raise ValueError(f"Unsupported coordinates: {value!r}")
    GeoLocation(latitude=latitude, longitude=longitude)
    return latitude, longitude


def _airport(
    city: str, country: str, code: Optional[str], coordinates: Optional[Coordinates]
) -> Airport:
    location = GeoLocation(*coordinates) if coordinates else None
    return Airport(city=city, country=country, code=code or None, location=location)


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)


class AirlineRecord(_Record):
    airline_name: str = Field(min_length=1)
    service_start_month: Month
    service_end_month: Month
    days_per_week: int = Field(ge=1, le=7)
    status: Optional[str] = None

    @field_validator("service_start_month", "service_end_month", mode="before")
    @classmethod
    def _parse_month(cls, value: Any) -> Month:
        if isinstance(value, Month):
            return value
        if isinstance(value, str):
            return Month.parse(value)
        raise ValueError(f"Month must be a name, got {value!r}")

    def to_domain(self) -> AirlineService:
        return AirlineService(
            name=self.airline_name,
            season_start=self.service_start_month,
            season_end=self.service_end_month,
            days_per_week=self.days_per_week,
            status=self.status,
        )


class DestinationFields(_Record):
    destination_city_name: str = Field(min_length=1)
    destination_country: str = Field(min_length=1)
    destination_airport_iata: Optional[str] = None
    destination_airport_coordinates: Optional[Coordinates] = None

    @field_validator("destination_airport_coordinates", mode="before")
    @classmethod
    def _parse_destination_coordinates(cls, value: Any) -> Optional[Coordinates]:
        return parse_coordinates(value)

    def destination_airport(self) -> Airport:
        return _airport(
            self.destination_city_name,
            self.destination_country,
            self.destination_airport_iata,
            self.destination_airport_coordinates,
        )


class ServiceRecord(_Record):
    origin_city_name: str = Field(min_length=1)
    origin_country: str = Field(min_length=1)
    origin_airport_iata: Optional[str] = None
    origin_airport_coordinates: Optional[Coordinates] = None
    flight_duration_minutes: int = Field(gt=0)
    airlines: List[AirlineRecord] = Field(default_factory=list)

    @field_validator("origin_airport_coordinates", mode="before")
    @classmethod
    def _parse_origin_coordinates(cls, value: Any) -> Optional[Coordinates]:
        return parse_coordinates(value)

    def origin_airport(self) -> Airport:
        return _airport(
            self.origin_city_name,
            self.origin_country,
            self.origin_airport_iata,
            self.origin_airport_coordinates,
        )

    def to_edge(self, destination: Airport, line_number: int) -> RawEdge:
        # An airline listed twice in one service is folded like a duplicate record.
        airlines = merge_airlines(airline.to_domain() for airline in self.airlines)
        return RawEdge(
            origin=self.origin_airport(),
            destination=destination,
            duration_minutes=self.flight_duration_minutes,
            airlines=airlines,
            line_number=line_number,
        )


class GroupedRecord(DestinationFields):
    """One destination with every service flying into it.

    Services stay unvalidated here so that a bad one can be skipped
    without losing its siblings.
    """

    direct_services: List[Any] = Field(default_factory=list)


class FlatEdgeRecord(ServiceRecord, DestinationFields):
    """A single service with both airports inline."""

    def to_flat_edge(self, line_number: int) -> RawEdge:
        return self.to_edge(self.destination_airport(), line_number)
