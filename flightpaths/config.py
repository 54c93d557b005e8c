"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for all configuration:
data file locations, ranking limits, the fixed trip destinations and
logging.

Configuration can be overridden via environment variables:
- FLIGHTPATHS_LEDGER_DATA_DIR=/path/to/data
- FLIGHTPATHS_LEDGER_CONSOLIDATE_DUPLICATES=true
- FLIGHTPATHS_RANKING_MAX_RESULTS=10
- FLIGHTPATHS_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.errors import ConfigurationError
from .domain.models import Airport, Destination, GeoLocation


class LedgerConfig(BaseSettings):
    """Flight data configuration.

    Environment variables prefixed with FLIGHTPATHS_LEDGER_.
    """

    model_config = SettingsConfigDict(env_prefix="FLIGHTPATHS_LEDGER_")

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent.parent / "data"
    )
    flights_file: str = "flights.jsonl"
    consolidate_duplicates: bool = False

    @property
    def flights_path(self) -> Path:
        """Full path to the flights JSON Lines file."""
        return self.data_dir / self.flights_file


class RankingConfig(BaseSettings):
    """Route search and ranking configuration.

    Environment variables prefixed with FLIGHTPATHS_RANKING_.
    """

    model_config = SettingsConfigDict(env_prefix="FLIGHTPATHS_RANKING_")

    max_results: int = Field(default=30, ge=1)
    max_hops: int = Field(default=3, ge=1, le=4)
    parallel_destinations: bool = False
    max_workers: int = Field(default=4, ge=1)
    nearest_airport_radius_km: float = Field(default=500.0, gt=0)


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with FLIGHTPATHS_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="FLIGHTPATHS_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s [%(levelname)s] %(name)s %(funcName)s():%(lineno)d - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"


class DestinationSettings(BaseModel):
    """A fixed destination as declared in settings."""

    city: str
    country: str
    code: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    ground_transfer_minutes: int = Field(default=0, ge=0)

    def to_destination(self) -> Destination:
        location = None
        if self.latitude is not None and self.longitude is not None:
            location = GeoLocation(latitude=self.latitude, longitude=self.longitude)
        airport = Airport(
            city=self.city, country=self.country, code=self.code, location=location
        )
        return Destination(
            airport=airport, ground_transfer_minutes=self.ground_transfer_minutes
        )


def _default_destinations() -> List[DestinationSettings]:
    return [
        DestinationSettings(
            city="Puerto Plata",
            country="Dominican Republic",
            code="POP",
            latitude=19.7579,
            longitude=-70.5700,
            ground_transfer_minutes=50,
        ),
        DestinationSettings(
            city="Santiago",
            country="Dominican Republic",
            code="STI",
            latitude=19.4062,
            longitude=-70.6046,
            ground_transfer_minutes=89,
        ),
        DestinationSettings(
            city="Santo Domingo",
            country="Dominican Republic",
            code="SDQ",
            latitude=18.4296,
            longitude=-69.6689,
            ground_transfer_minutes=222,
        ),
        DestinationSettings(
            city="Punta Cana",
            country="Dominican Republic",
            code="PUJ",
            latitude=18.5601,
            longitude=-68.3725,
            ground_transfer_minutes=329,
        ),
    ]


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

    This is the main entry point for configuration. Sub-configurations
    can be accessed via attributes:

        config = get_config()
        print(config.ledger.flights_path)
        print(config.ranking.max_results)

    Environment variables prefixed with FLIGHTPATHS_.
    """

    model_config = SettingsConfigDict(env_prefix="FLIGHTPATHS_")

    ledger: LedgerConfig = Field(default_factory=LedgerConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    destinations: List[DestinationSettings] = Field(
        default_factory=_default_destinations, min_length=1
    )
    default_origins: List[str] = Field(
        default_factory=lambda: [
            "New York, USA",
            "Miami, USA",
            "Toronto, Canada",
            "Madrid, Spain",
            "Paris, France",
        ]
    )

    def destination_list(self) -> List[Destination]:
        """Configured destinations as domain objects, in display order."""
        return [entry.to_destination() for entry in self.destinations]


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.

    Raises:
        ConfigurationError: If the environment holds invalid settings.
    """
    try:
        return AppConfig()
    except ValidationError as e:
        errors = e.errors()
        setting = ".".join(str(part) for part in errors[0]["loc"]) if errors else ""
        raise ConfigurationError(
            "Invalid configuration", setting_name=setting, cause=e
        ) from e


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
