"""JSON Lines ledger repository adapter.

This adapter reads the flight data file and builds the immutable
FlightLedger snapshot:
- Configuration injection (paths from config)
- Snapshot caching, replaced wholesale on reload
- Per-entry recovery: malformed lines or services are skipped with a warning
- Whole-source failures surface as LedgerLoadError
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from ...config import LedgerConfig, get_config
from ...domain.errors import AirportNotFoundError, LedgerLoadError, MalformedRecordError
from ...domain.models import Airport, RawEdge
from ...ledger.ledger import FlightLedger
from ...ledger.reconciler import consolidate_edges
from .records import FlatEdgeRecord, GroupedRecord, ServiceRecord


def _decode_line(line: Union[bytes, str], line_number: int) -> str:
    """Decode one raw line; a leading byte-order mark is dropped."""
    if isinstance(line, str):
        return line.strip().lstrip("\ufeff")
    try:
        return line.decode("utf-8-sig").strip()
    except UnicodeDecodeError as e:
        raise MalformedRecordError(
            "Entry is not valid UTF-8",
            line_number=line_number,
            reason="invalid_encoding",
            cause=e,
        ) from e


@dataclass
class LoadReport:
    """Counters collected while parsing one source."""

    entries: int = 0
    skipped: int = 0
    edges: List[RawEdge] = field(default_factory=list)


@dataclass
class JsonlLedgerRepository:
    """Ledger repository that loads from a JSON Lines file.

    This adapter implements LedgerRepositoryPort.

    Attributes:
        config: Ledger configuration (paths, duplicate consolidation)
    """

    config: LedgerConfig = field(default_factory=lambda: get_config().ledger)
    _logger: logging.Logger = field(init=False, repr=False)

    # Current snapshot
    _ledger: Optional[FlightLedger] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def load(self) -> FlightLedger:
        """Load the ledger from the configured file.

        Returns:
            The cached snapshot if one was already loaded.

        Raises:
            LedgerLoadError: If the file cannot be read.
        """
        if self._ledger is not None:
            return self._ledger
        return self.reload()

    def reload(self) -> FlightLedger:
        """Re-read the file and replace the snapshot.

        The previous snapshot stays in use if reading fails.

        Raises:
            LedgerLoadError: If the file cannot be read.
        """
        path = self.config.flights_path
        self._logger.debug("Loading ledger", extra={"flights_path": str(path)})

        try:
            # Binary read: each line is decoded on its own so one bad entry is skipped.
            with path.open("rb") as f:
                report = self.parse_lines(f)
        except OSError as e:
            raise LedgerLoadError(
                "Failed to load flight data",
                file_path=str(path),
                cause=e,
            ) from e

        edges: Sequence[RawEdge] = report.edges
        if self.config.consolidate_duplicates:
            edges = consolidate_edges(edges)

        ledger = FlightLedger(edges)
        self._ledger = ledger
        self._logger.info(
            "Ledger loaded: %d edges, %d airports, %d skipped",
            len(ledger),
            len(ledger.airports()),
            report.skipped,
            extra={
                "entries": report.entries,
                "skipped": report.skipped,
                "edges": len(ledger),
                "airports": len(ledger.airports()),
            },
        )
        if ledger.is_empty:
            self._logger.warning(
                "Ledger is empty: %s", path, extra={"flights_path": str(path)}
            )
        return ledger

    def parse_lines(self, lines: Iterable[Union[bytes, str]]) -> LoadReport:
        """Parse JSON Lines into raw edges, skipping bad entries.

        Lines may be raw bytes (decoded here as UTF-8) or text.
        """
        report = LoadReport()
        for line_number, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            report.entries += 1

            try:
                text = _decode_line(line, line_number)
                edges, skipped = self._parse_entry(text, line_number)
            except MalformedRecordError as e:
                report.skipped += 1
                self._logger.warning(
                    "Skipping malformed entry at line %d (%s): %s",
                    e.line_number,
                    e.reason,
                    e,
                    extra={"line": e.line_number, "reason": e.reason},
                )
                continue

            report.edges.extend(edges)
            report.skipped += skipped
        return report

    def _parse_entry(self, text: str, line_number: int) -> Tuple[List[RawEdge], int]:
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedRecordError(
                "Entry is not valid JSON",
                line_number=line_number,
                reason="invalid_json",
                cause=e,
            )
        if not isinstance(payload, dict):
            raise MalformedRecordError(
                "Entry is not a JSON object",
                line_number=line_number,
                reason="not_an_object",
            )

        if "direct_services" not in payload:
            try:
                return [FlatEdgeRecord.model_validate(payload).to_flat_edge(line_number)], 0
            except (ValidationError, ValueError) as e:
                raise MalformedRecordError(
                    "Invalid service entry",
                    line_number=line_number,
                    reason="invalid_record",
                    cause=e,
                )

        try:
            record = GroupedRecord.model_validate(payload)
            destination = record.destination_airport()
        except (ValidationError, ValueError) as e:
            raise MalformedRecordError(
                "Invalid destination entry",
                line_number=line_number,
                reason="invalid_record",
                cause=e,
            )

        edges: List[RawEdge] = []
        skipped = 0
        for position, service in enumerate(record.direct_services):
            try:
                edges.append(
                    ServiceRecord.model_validate(service).to_edge(destination, line_number)
                )
            except (ValidationError, ValueError) as e:
                skipped += 1
                self._logger.warning(
                    "Skipping malformed service %d at line %d: %s",
                    position,
                    line_number,
                    e,
                    extra={
                        "line": line_number,
                        "service_index": position,
                        "destination": destination.key,
                        "error": str(e),
                    },
                )
        return edges, skipped

    def get_airport(self, key: str) -> Optional[Airport]:
        """Get airport details by 'City, Country' key or IATA code.

        Returns:
            The canonical Airport, or None if not found.
        """
        return self.load().lookup(key)

    def get_airport_or_raise(self, key: str) -> Airport:
        """Get airport details by key, raising if not found.

        Raises:
            AirportNotFoundError: If the airport is not in the ledger.
        """
        airport = self.get_airport(key)
        if airport is None:
            raise AirportNotFoundError(
                f"Airport not found: {key}",
                airport_key=key,
            )
        return airport

    def list_airports(self) -> Sequence[Airport]:
        """List all airports, sorted by key."""
        return list(self.load().airports())
