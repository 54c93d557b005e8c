"""Ledger adapters - Implementations of LedgerRepositoryPort.

Available implementations:
- JsonlLedgerRepository: Loads the ledger from a JSON Lines file
"""

from .jsonl_repository import JsonlLedgerRepository, LoadReport

__all__ = ["JsonlLedgerRepository", "LoadReport"]
