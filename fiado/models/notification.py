"""Overdue notification record."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Notification:
    """Derived, non-persisted flag for a customer who owes money and has not paid recently."""

    customer_id: str
    customer_name: str
    message: str
    pending_balance: Decimal
