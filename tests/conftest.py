"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Callable

import pytest

from fiado.models import Customer, Transaction, TransactionKind
from fiado.service import LedgerService
from fiado.store import InMemoryLedgerStore

NOW = datetime(2026, 5, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for reproducible tests."""
    return NOW


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def make_customer() -> Callable[..., Customer]:
    """Factory for customers with sensible defaults."""

    def _make(
        customer_id: str = "cust-001",
        first_name: str = "Ana",
        last_name: str = "García",
        national_id: str = "30111222",
        phone: str = "",
        created_at: datetime = NOW,
    ) -> Customer:
        return Customer(
            customer_id=customer_id,
            first_name=first_name,
            last_name=last_name,
            national_id=national_id,
            phone=phone,
            created_at=created_at,
        )

    return _make


@pytest.fixture
def make_transaction() -> Callable[..., Transaction]:
    """Factory for transactions dated relative to ``NOW``."""
    counter = iter(range(1, 10_000))

    def _make(
        customer_id: str = "cust-001",
        kind: TransactionKind = TransactionKind.PURCHASE,
        amount: str | int = 100,
        days_ago: int = 0,
        note: str = "",
    ) -> Transaction:
        return Transaction(
            transaction_id=f"tx-{next(counter):03d}",
            customer_id=customer_id,
            timestamp=NOW - timedelta(days=days_ago),
            kind=kind,
            amount=Decimal(str(amount)),
            note=note,
        )

    return _make


@pytest.fixture
def store() -> InMemoryLedgerStore:
    """Create a fresh store whose clock is frozen at ``NOW``."""
    return InMemoryLedgerStore(clock=lambda: NOW)


@pytest.fixture
def service(store: InMemoryLedgerStore) -> LedgerService:
    """Service over an empty in-memory store."""
    return LedgerService(store)
