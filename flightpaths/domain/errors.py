"""Typed domain errors for the route discovery engine.

All errors inherit from FlightPathsError and can optionally wrap a root
cause exception for debugging.

Only whole-source failures travel up to the caller. A bad individual
record is reported with MalformedRecordError inside the loader and
skipped; an unknown airport or a missing service is an empty result,
never an error.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class FlightPathsError(Exception):
    """Base error for the flightpaths domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class LedgerLoadError(FlightPathsError):
    """The flight data source could not be read as a whole.

    Fatal to session initialization: no partial ledger is published.

    Attributes:
        file_path: Path to the data file if relevant
    """

    file_path: Optional[str] = None


@dataclass
class MalformedRecordError(FlightPathsError):
    """One input entry could not be turned into service records.

    Attributes:
        line_number: 1-based line of the entry in the source
        reason: Short machine-friendly reason tag
    """

    line_number: int = 0
    reason: str = ""


@dataclass
class AirportNotFoundError(FlightPathsError):
    """Airport key not known to the ledger.

    Attributes:
        airport_key: The key or code that was looked up
    """

    airport_key: str = ""


@dataclass
class ConfigurationError(FlightPathsError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
    """

    setting_name: str = ""
