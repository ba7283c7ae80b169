"""Ledger stores: the in-memory reference store and the PostgreSQL store."""

from fiado.store.base import LedgerStore
from fiado.store.memory import InMemoryLedgerStore

__all__ = ["InMemoryLedgerStore", "LedgerStore"]
