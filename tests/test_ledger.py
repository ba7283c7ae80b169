"""Tests for balance, overdue notifications and customer search."""

import types
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from fiado.ledger import (
    calculate_balance,
    filter_customers,
    last_payment,
    notification_for,
    one_month_before,
    overdue_notifications,
)
from fiado.ledger.notifications import DEFAULT_MESSAGE
from fiado.models import Notification, TransactionKind

PURCHASE = TransactionKind.PURCHASE
PAYMENT = TransactionKind.PAYMENT


class TestCalculateBalance:
    """Tests for calculate_balance."""

    def test_no_transactions(self) -> None:
        """Test that an empty history yields zero."""
        assert calculate_balance("cust-001", []) == Decimal(0)

    def test_purchases_minus_payments(self, make_transaction) -> None:
        transactions = [
            make_transaction(kind=PURCHASE, amount="100.50"),
            make_transaction(kind=PURCHASE, amount="49.50"),
            make_transaction(kind=PAYMENT, amount="30"),
        ]

        assert calculate_balance("cust-001", transactions) == Decimal("120.00")

    def test_ignores_other_customers(self, make_transaction) -> None:
        transactions = [
            make_transaction(customer_id="cust-001", amount=100),
            make_transaction(customer_id="cust-002", amount=999),
            make_transaction(customer_id="cust-002", kind=PAYMENT, amount=5),
        ]

        assert calculate_balance("cust-001", transactions) == Decimal("100")
        assert calculate_balance("cust-002", transactions) == Decimal("994")
        assert calculate_balance("cust-003", transactions) == Decimal(0)

    def test_negative_balance_allowed(self, make_transaction) -> None:
        transactions = [
            make_transaction(kind=PURCHASE, amount=50),
            make_transaction(kind=PAYMENT, amount=80),
        ]

        assert calculate_balance("cust-001", transactions) == Decimal("-30")

    def test_order_irrelevant(self, make_transaction) -> None:
        """Test the balance does not depend on transaction order."""
        transactions = [
            make_transaction(kind=PURCHASE, amount=10),
            make_transaction(kind=PAYMENT, amount=3),
            make_transaction(kind=PURCHASE, amount="7.25"),
        ]

        forward = calculate_balance("cust-001", transactions)
        backward = calculate_balance("cust-001", list(reversed(transactions)))

        assert forward == backward == Decimal("14.25")

    def test_matches_sum_formula(self, make_transaction) -> None:
        """Test balance equals purchases total minus payments total."""
        transactions = [
            make_transaction(kind=PURCHASE if i % 3 else PAYMENT, amount=i * 7)
            for i in range(1, 20)
        ]

        purchases = sum(t.amount for t in transactions if t.kind == PURCHASE)
        payments = sum(t.amount for t in transactions if t.kind == PAYMENT)

        assert calculate_balance("cust-001", transactions) == purchases - payments

    def test_accepts_generator(self, make_transaction) -> None:
        transactions = (make_transaction(amount=5) for _ in range(3))
        assert calculate_balance("cust-001", transactions) == Decimal("15")


class TestOneMonthBefore:
    """Tests for one_month_before."""

    def test_simple(self) -> None:
        moment = datetime(2026, 5, 15, 12, 30, tzinfo=timezone.utc)
        assert one_month_before(moment) == datetime(2026, 4, 15, 12, 30, tzinfo=timezone.utc)

    def test_january_rolls_back_year(self) -> None:
        """Test January goes back to December of the previous year."""
        moment = datetime(2026, 1, 10, 8, 0, tzinfo=timezone.utc)
        assert one_month_before(moment) == datetime(2025, 12, 10, 8, 0, tzinfo=timezone.utc)

    def test_clamps_day(self) -> None:
        """Test March 31 becomes February 28."""
        assert one_month_before(datetime(2026, 3, 31)) == datetime(2026, 2, 28)

    def test_clamps_day_leap_year(self) -> None:
        """Test March 31 becomes February 29 in a leap year."""
        assert one_month_before(datetime(2024, 3, 31)) == datetime(2024, 2, 29)

    def test_clamps_to_thirty(self) -> None:
        assert one_month_before(datetime(2026, 5, 31)) == datetime(2026, 4, 30)

    def test_keeps_timezone(self) -> None:
        tz = timezone(timedelta(hours=-3))
        result = one_month_before(datetime(2026, 7, 1, 23, 59, tzinfo=tz))
        assert result.tzinfo is tz


class TestLastPayment:
    """Tests for last_payment."""

    def test_none_without_payments(self, make_transaction) -> None:
        assert last_payment("cust-001", [make_transaction(kind=PURCHASE)]) is None

    def test_latest_by_timestamp(self, make_transaction) -> None:
        """Test the latest payment is chosen by timestamp, not position."""
        old = make_transaction(kind=PAYMENT, days_ago=40)
        recent = make_transaction(kind=PAYMENT, days_ago=3)
        other = make_transaction(customer_id="cust-002", kind=PAYMENT, days_ago=0)

        assert last_payment("cust-001", [old, recent, other]) == recent
        assert last_payment("cust-001", [recent, old, other]) == recent


class TestOverdueNotifications:
    """Tests for overdue_notifications."""

    def test_purchase_without_payment_is_overdue(self, make_customer, make_transaction, now) -> None:
        """One purchase of 100 and no payments: notified with 100 pending."""
        customer = make_customer()
        transactions = [make_transaction(amount=100)]

        result = list(overdue_notifications([customer], transactions, now=now))

        assert calculate_balance(customer.customer_id, transactions) == Decimal("100")
        assert result == [
            Notification(
                customer_id="cust-001",
                customer_name="Ana García",
                message=DEFAULT_MESSAGE,
                pending_balance=Decimal("100"),
            )
        ]

    def test_paid_off_customer_excluded(self, make_customer, make_transaction, now) -> None:
        """Purchase 100 fifty days ago, payment 100 ten days ago: balance 0, excluded."""
        transactions = [
            make_transaction(kind=PURCHASE, amount=100, days_ago=50),
            make_transaction(kind=PAYMENT, amount=100, days_ago=10),
        ]

        assert list(overdue_notifications([make_customer()], transactions, now=now)) == []

    def test_paid_off_long_ago_still_excluded(self, make_customer, make_transaction, now) -> None:
        """Test a zero balance is not flagged however old the last payment."""
        transactions = [
            make_transaction(kind=PURCHASE, amount=100, days_ago=200),
            make_transaction(kind=PAYMENT, amount=100, days_ago=150),
        ]

        assert list(overdue_notifications([make_customer()], transactions, now=now)) == []

    def test_stale_partial_payment(self, make_customer, make_transaction, now) -> None:
        """Purchase 200, payment 50 forty days ago: 150 pending."""
        transactions = [
            make_transaction(kind=PURCHASE, amount=200, days_ago=60),
            make_transaction(kind=PAYMENT, amount=50, days_ago=40),
        ]

        result = list(overdue_notifications([make_customer()], transactions, now=now))

        assert len(result) == 1
        assert result[0].pending_balance == Decimal("150")

    def test_recent_payment_not_overdue(self, make_customer, make_transaction, now) -> None:
        transactions = [
            make_transaction(kind=PURCHASE, amount=200, days_ago=60),
            make_transaction(kind=PAYMENT, amount=50, days_ago=40),
            make_transaction(kind=PAYMENT, amount=20, days_ago=5),
        ]

        assert list(overdue_notifications([make_customer()], transactions, now=now)) == []

    def test_payment_exactly_one_month_ago_is_current(
        self, make_customer, make_transaction, now
    ) -> None:
        """Test that only payments strictly older than the cutoff are stale."""
        cutoff_days = (now - one_month_before(now)).days
        transactions = [
            make_transaction(kind=PURCHASE, amount=200, days_ago=60),
            make_transaction(kind=PAYMENT, amount=50, days_ago=cutoff_days),
        ]
        assert list(overdue_notifications([make_customer()], transactions, now=now)) == []

        transactions.append(make_transaction(kind=PURCHASE, amount=1, days_ago=0))
        stale = [t for t in transactions if t.kind == PURCHASE] + [
            make_transaction(kind=PAYMENT, amount=50, days_ago=cutoff_days + 1)
        ]
        assert len(list(overdue_notifications([make_customer()], stale, now=now))) == 1

    def test_customers_without_transactions_excluded(self, make_customer, now) -> None:
        customers = [make_customer(customer_id=f"cust-{i}") for i in range(3)]
        assert list(overdue_notifications(customers, [], now=now)) == []

    def test_negative_balance_excluded(self, make_customer, make_transaction, now) -> None:
        transactions = [
            make_transaction(kind=PURCHASE, amount=10, days_ago=90),
            make_transaction(kind=PAYMENT, amount=50, days_ago=90),
        ]
        assert list(overdue_notifications([make_customer()], transactions, now=now)) == []

    def test_follows_customer_order(self, make_customer, make_transaction, now) -> None:
        customers = [
            make_customer(customer_id="cust-003", first_name="Carla"),
            make_customer(customer_id="cust-001", first_name="Ana"),
            make_customer(customer_id="cust-002", first_name="Beto"),
        ]
        transactions = [
            make_transaction(customer_id="cust-001", amount=10),
            make_transaction(customer_id="cust-002", amount=20),
            make_transaction(customer_id="cust-003", amount=30),
        ]

        result = overdue_notifications(customers, transactions, now=now)

        assert [n.customer_id for n in result] == ["cust-003", "cust-001", "cust-002"]

    def test_is_lazy(self, make_customer, now) -> None:
        """Test notifications are produced on demand."""
        result = overdue_notifications([make_customer()], [], now=now)
        assert isinstance(result, types.GeneratorType)

    def test_idempotent(self, make_customer, make_transaction, now) -> None:
        """Test two evaluations with the same inputs are deep-equal."""
        customers = [make_customer(customer_id="cust-001"), make_customer(customer_id="cust-002")]
        transactions = [
            make_transaction(customer_id="cust-001", amount=100, days_ago=45),
            make_transaction(customer_id="cust-002", amount=70, days_ago=2),
            make_transaction(customer_id="cust-002", kind=PAYMENT, amount=10, days_ago=35),
        ]
        snapshot = list(transactions)

        first = list(overdue_notifications(customers, transactions, now=now))
        second = list(overdue_notifications(customers, transactions, now=now))

        assert first == second
        assert len(first) == 2
        assert transactions == snapshot

    def test_custom_message(self, make_customer, make_transaction, now) -> None:
        result = list(
            overdue_notifications(
                [make_customer()], [make_transaction()], now=now, message="Recordar cobro"
            )
        )
        assert result[0].message == "Recordar cobro"

    def test_defaults_to_current_time(self, make_customer, make_transaction) -> None:
        """Test that a never-paying debtor is flagged without an explicit now."""
        result = list(overdue_notifications([make_customer()], [make_transaction()]))
        assert len(result) == 1

    def test_notification_for_returns_none_when_current(
        self, make_customer, make_transaction, now
    ) -> None:
        transactions = [
            make_transaction(amount=100, days_ago=20),
            make_transaction(kind=PAYMENT, amount=10, days_ago=1),
        ]
        assert notification_for(make_customer(), transactions, one_month_before(now)) is None


class TestFilterCustomers:
    """Tests for filter_customers."""

    @pytest.fixture
    def customers(self, make_customer) -> list:
        return [
            make_customer(customer_id="c1", first_name="Ana", last_name="García", national_id="30111222"),
            make_customer(customer_id="c2", first_name="Bruno", last_name="Díaz", national_id="28999000"),
            make_customer(customer_id="c3", first_name="Carla", last_name="Garcés", national_id="40123456"),
        ]

    def test_empty_query_returns_all_in_order(self, customers: list) -> None:
        assert filter_customers("", customers) == customers

    def test_case_insensitive_name(self, customers: list) -> None:
        assert [c.customer_id for c in filter_customers("GARC", customers)] == ["c1", "c3"]

    def test_matches_national_id(self, customers: list) -> None:
        assert [c.customer_id for c in filter_customers("2899", customers)] == ["c2"]

    def test_matches_across_first_and_last_name(self, customers: list) -> None:
        """Test each name field is matched on its own."""
        assert [c.customer_id for c in filter_customers("bruno díaz", customers)] == ["c2"]

    def test_no_match(self, customers: list) -> None:
        assert filter_customers("zzz", customers) == []

    def test_substring_only(self, customers: list) -> None:
        """Test that tokens out of order do not match."""
        assert filter_customers("garcía ana", customers) == []
