"""Immutable domain models for the route discovery engine.

All models are frozen dataclasses with slots. These models have no
external dependencies and represent the core business concepts of the
application: airports, scheduled airline services between airport
pairs, and the ranked route candidates built from them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


def normalize_key(text: str) -> str:
    """Normalize an airport key for comparison.

    Case and whitespace are ignored, including around the comma that
    separates city and country: "Santo  Domingo ,Dominican Republic"
    and "santo domingo, dominican republic" compare equal.
    """
    parts = [" ".join(part.split()) for part in text.split(",")]
    return ",".join(parts).casefold()


class Month(Enum):
    """Calendar month used for airline season boundaries."""

    JAN = 1
    FEB = 2
    MAR = 3
    APR = 4
    MAY = 5
    JUN = 6
    JUL = 7
    AUG = 8
    SEP = 9
    OCT = 10
    NOV = 11
    DEC = 12

    @classmethod
    def parse(cls, value: str) -> Month:
        """Parse 'Jan', 'jan' or 'January' into a Month.

        Raises:
            ValueError: If the text names no month.
        """
        text = value.strip()
        try:
            month = cls[text[:3].upper()]
        except KeyError:
            raise ValueError(f"Unknown month: {value!r}") from None
        if len(text) > 3 and not month.full_name.lower().startswith(text.lower()):
            raise ValueError(f"Unknown month: {value!r}")
        return month

    @property
    def abbreviation(self) -> str:
        """Three-letter label as found in the data files ('Jan')."""
        return self.name.title()

    @property
    def full_name(self) -> str:
        return _MONTH_NAMES[self.value - 1]


_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


class RouteKind(Enum):
    """Shape of a route candidate."""

    DIRECT = "direct"
    CONNECTING = "connecting"


@dataclass(frozen=True, slots=True)
class GeoLocation:
    """GPS coordinates representing a geographic location."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        if not -90 <= self.latitude <= 90:
            raise ValueError(
                f"Latitude must be between -90 and 90, got {self.latitude}"
            )
        if not -180 <= self.longitude <= 180:
            raise ValueError(
                f"Longitude must be between -180 and 180, got {self.longitude}"
            )


@dataclass(frozen=True, slots=True, eq=False)
class Airport:
    """An airport identified by city and country.

    Two airports are equal when their normalized keys match, whatever
    code or coordinates each record carried. The ledger keeps one
    canonical instance per key with the authoritative metadata.

    Attributes:
        city: City served by the airport (e.g., 'Puerto Plata')
        country: Country name (e.g., 'Dominican Republic')
        code: IATA code if known (e.g., 'POP')
        location: GPS coordinates if known
    """

    city: str
    country: str
    code: Optional[str] = None
    location: Optional[GeoLocation] = None

    def __post_init__(self) -> None:
        if not self.city.strip() or not self.country.strip():
            raise ValueError("Airport city and country must not be empty")

    @property
    def key(self) -> str:
        """Display key, 'City, Country'."""
        return f"{self.city}, {self.country}"

    @property
    def normalized_key(self) -> str:
        return normalize_key(self.key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Airport):
            return NotImplemented
        return self.normalized_key == other.normalized_key

    def __hash__(self) -> int:
        return hash(self.normalized_key)

    def __str__(self) -> str:
        return self.key


@dataclass(frozen=True, slots=True)
class AirlineService:
    """One airline operating an airport pair.

    Attributes:
        name: Airline name, unique within a leg
        season_start: First month of operation
        season_end: Last month of operation
        days_per_week: Operating days per week, 1 to 7
        status: Free-form status from the source (e.g., 'active')
    """

    name: str
    season_start: Month
    season_end: Month
    days_per_week: int
    status: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("Airline name must not be empty")
        if not 1 <= self.days_per_week <= 7:
            raise ValueError(
                f"Days per week must be between 1 and 7, got {self.days_per_week}"
            )

    @property
    def is_year_round(self) -> bool:
        """Check if the season spans January to December."""
        return self.season_start is Month.JAN and self.season_end is Month.DEC


def _check_airlines(airlines: tuple[AirlineService, ...]) -> None:
    names = [airline.name for airline in airlines]
    if len(names) != len(set(names)):
        raise ValueError(f"Airline names must be unique, got {names}")


@dataclass(frozen=True, slots=True)
class RawEdge:
    """A stored, nominally-directed service record between two airports.

    Edges are kept exactly as loaded. The reconciler turns them into
    directionally-correct ServiceLeg objects on demand.

    Attributes:
        origin: Origin airport as written in the record
        destination: Destination airport as written in the record
        duration_minutes: Flight time in minutes
        airlines: Airlines operating the service
        line_number: Source line, for diagnostics (0 if unknown)
    """

    origin: Airport
    destination: Airport
    duration_minutes: int
    airlines: tuple[AirlineService, ...] = field(default_factory=tuple)
    line_number: int = 0

    def __post_init__(self) -> None:
        if self.origin == self.destination:
            raise ValueError(f"Edge origin and destination are both {self.origin}")
        if self.duration_minutes <= 0:
            raise ValueError(
                f"Duration must be positive, got {self.duration_minutes}"
            )
        _check_airlines(self.airlines)

    def other_end(self, airport: Airport) -> Airport:
        """Return the endpoint opposite to ``airport``."""
        return self.destination if airport == self.origin else self.origin


@dataclass(frozen=True, slots=True)
class ServiceLeg:
    """A directionally-correct flight leg.

    Attributes:
        origin: Departure airport
        destination: Arrival airport
        duration_minutes: Flight time in minutes
        airlines: Airlines operating the leg, unique by name
    """

    origin: Airport
    destination: Airport
    duration_minutes: int
    airlines: tuple[AirlineService, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.origin == self.destination:
            raise ValueError(f"Leg origin and destination are both {self.origin}")
        if self.duration_minutes <= 0:
            raise ValueError(
                f"Duration must be positive, got {self.duration_minutes}"
            )
        _check_airlines(self.airlines)

    @property
    def airline_names(self) -> tuple[str, ...]:
        return tuple(airline.name for airline in self.airlines)


@dataclass(frozen=True, slots=True)
class RouteCandidate:
    """A scored travel option between two airports.

    Attributes:
        kind: Direct or connecting
        legs: Ordered legs, origin first
        duration_minutes: Sum of the leg durations
        volume_factor: Frequency score, floored at 0.1
        efficiency_ratio: duration / volume_factor, lower is better
        via: Transfer airport for connecting routes
    """

    kind: RouteKind
    legs: tuple[ServiceLeg, ...]
    duration_minutes: int
    volume_factor: float
    efficiency_ratio: float
    via: Optional[Airport] = None

    @property
    def origin(self) -> Airport:
        return self.legs[0].origin

    @property
    def destination(self) -> Airport:
        return self.legs[-1].destination

    @property
    def transfers(self) -> tuple[Airport, ...]:
        """Intermediate airports, in travel order."""
        return tuple(leg.destination for leg in self.legs[:-1])

    @property
    def via_label(self) -> Optional[str]:
        """Transfer city name(s), None for direct routes."""
        if self.kind is RouteKind.DIRECT:
            return None
        return " / ".join(airport.city for airport in self.transfers)

    @property
    def is_direct(self) -> bool:
        return self.kind is RouteKind.DIRECT


@dataclass(frozen=True, slots=True)
class Destination:
    """A fixed trip destination and its ground transfer to the venue.

    Attributes:
        airport: Arrival airport
        ground_transfer_minutes: Shuttle time from the airport to the venue
    """

    airport: Airport
    ground_transfer_minutes: int = 0


@dataclass(frozen=True, slots=True)
class DestinationOptions:
    """Ranked route candidates for one destination."""

    destination: Destination
    routes: tuple[RouteCandidate, ...] = field(default_factory=tuple)

    @property
    def best(self) -> Optional[RouteCandidate]:
        """Top-ranked candidate, if any."""
        return self.routes[0] if self.routes else None

    @property
    def is_empty(self) -> bool:
        return len(self.routes) == 0

    def door_to_door_minutes(self, route: RouteCandidate) -> int:
        """Flight time plus the ground transfer at the destination."""
        return route.duration_minutes + self.destination.ground_transfer_minutes
