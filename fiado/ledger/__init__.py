"""Ledger computations over in-memory customer and transaction collections."""

from fiado.ledger.balance import calculate_balance
from fiado.ledger.notifications import (
    last_payment,
    notification_for,
    one_month_before,
    overdue_notifications,
)
from fiado.ledger.search import filter_customers

__all__ = [
    "calculate_balance",
    "filter_customers",
    "last_payment",
    "notification_for",
    "one_month_before",
    "overdue_notifications",
]
