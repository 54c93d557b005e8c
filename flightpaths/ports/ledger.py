"""Ledger ports - Abstractions for loading flight data.

These protocols define the contract between the route planner and the
storage that produces the immutable ledger snapshot.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import Airport
    from ..ledger.ledger import FlightLedger


class LedgerRepositoryPort(Protocol):
    """Port for loading the flight ledger.

    Implementation: adapters/ledger/jsonl_repository.py

    The repository loads the service records once, keeps the resulting
    snapshot, and replaces it wholesale on reload.
    """

    def load(self) -> FlightLedger:
        """Load the ledger, or return the snapshot already loaded.

        Returns:
            The immutable ledger snapshot.

        Raises:
            LedgerLoadError: If the source cannot be read.
        """
        ...

    def reload(self) -> FlightLedger:
        """Re-read the source and replace the snapshot.

        On failure the previous snapshot stays in place.

        Returns:
            The new ledger snapshot.
        """
        ...

    def get_airport(self, key: str) -> Optional[Airport]:
        """Get airport details by 'City, Country' key or IATA code.

        Returns:
            The canonical Airport, or None if not found.
        """
        ...

    def list_airports(self) -> Sequence[Airport]:
        """List all airports known to the ledger."""
        ...
