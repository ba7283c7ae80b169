"""Tests for sample data generators."""

from datetime import datetime, timedelta
from decimal import Decimal

from fiado.generators import CustomerGenerator, TransactionGenerator, populate
from fiado.ledger import calculate_balance
from fiado.models import CustomerFields, TransactionKind
from fiado.store import InMemoryLedgerStore


class TestCustomerGenerator:
    """Tests for CustomerGenerator."""

    def test_generate(self, seed: int) -> None:
        fields = CustomerGenerator(seed=seed).generate()

        assert isinstance(fields, CustomerFields)
        assert fields.validate() == fields
        assert len(fields.national_id) == 8
        assert fields.national_id.isdigit()

    def test_reproducible(self, seed: int) -> None:
        """Test the same seed yields the same customers."""
        first = list(CustomerGenerator(seed=seed).generate_batch(5))
        second = list(CustomerGenerator(seed=seed).generate_batch(5))

        assert first == second

    def test_batch_size(self, seed: int) -> None:
        assert len(list(CustomerGenerator(seed=seed).generate_batch(7))) == 7


class TestTransactionGenerator:
    """Tests for TransactionGenerator."""

    def test_history_is_chronological(self, seed: int, now: datetime) -> None:
        """Test a history is ordered oldest first."""
        history = TransactionGenerator(seed=seed).generate_history("c1", count=10, now=now)

        timestamps = [t.timestamp for t in history]
        assert len(history) == 10
        assert timestamps == sorted(timestamps)
        assert all(now - timedelta(days=120) <= ts <= now for ts in timestamps)

    def test_first_is_purchase(self, seed: int, now: datetime) -> None:
        history = TransactionGenerator(seed=seed).generate_history("c1", count=5, now=now)
        assert history[0].kind == TransactionKind.PURCHASE

    def test_balance_never_negative(self, seed: int, now: datetime) -> None:
        """Test that payments never exceed what is owed."""
        generator = TransactionGenerator(seed=seed)
        for i in range(30):
            owed = Decimal(0)
            for tx in generator.generate_history(f"c{i}", count=15, now=now):
                owed += tx.amount if tx.kind == TransactionKind.PURCHASE else -tx.amount
                assert tx.amount >= 0
                assert owed >= 0

    def test_random_count(self, seed: int, now: datetime) -> None:
        history = TransactionGenerator(seed=seed).generate_history("c1", now=now)
        assert 1 <= len(history) <= 12


class TestPopulate:
    """Tests for populate."""

    def test_populate_store(self, store: InMemoryLedgerStore, seed: int, now: datetime) -> None:
        """Test populate fills the store and reports counts."""
        counts = populate(store, 5, seed=seed, now=now)

        assert counts["customers"] == 5
        assert store.summary() == counts
        for customer in store.list_customers():
            assert calculate_balance(customer.customer_id, store.list_transactions()) >= 0
