"""Domain layer - Core business models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    AirportNotFoundError,
    ConfigurationError,
    FlightPathsError,
    LedgerLoadError,
    MalformedRecordError,
)
from .models import (
    AirlineService,
    Airport,
    Destination,
    DestinationOptions,
    GeoLocation,
    Month,
    RawEdge,
    RouteCandidate,
    RouteKind,
    ServiceLeg,
    normalize_key,
)

__all__ = [
    # Models
    "GeoLocation",
    "Airport",
    "Month",
    "AirlineService",
    "RawEdge",
    "ServiceLeg",
    "RouteKind",
    "RouteCandidate",
    "Destination",
    "DestinationOptions",
    "normalize_key",
    # Errors
    "FlightPathsError",
    "LedgerLoadError",
    "MalformedRecordError",
    "AirportNotFoundError",
    "ConfigurationError",
]
