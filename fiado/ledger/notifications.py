"""Overdue payment notifications."""

import calendar
from datetime import datetime, timezone
from typing import Iterable, Iterator, Sequence

from fiado.config import DEFAULT_REMINDER_MESSAGE as DEFAULT_MESSAGE
from fiado.ledger.balance import calculate_balance
from fiado.models import Customer, Notification, Transaction, TransactionKind


def one_month_before(moment: datetime) -> datetime:
    """Return the same wall-clock time one calendar month earlier.

    January rolls back to December of the previous year. The day of month
    is clamped to the length of the target month (March 31 -> February 28
    or 29).
    """
    year, month = (moment.year - 1, 12) if moment.month == 1 else (moment.year, moment.month - 1)
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def last_payment(customer_id: str, transactions: Iterable[Transaction]) -> Transaction | None:
    """Most recent payment made by a customer, if any."""
    payments = [
        t
        for t in transactions
        if t.customer_id == customer_id and t.kind == TransactionKind.PAYMENT
    ]
    return max(payments, key=lambda t: t.timestamp, default=None)


def notification_for(
    customer: Customer,
    transactions: Sequence[Transaction],
    cutoff: datetime,
    message: str = DEFAULT_MESSAGE,
) -> Notification | None:
    """Build the notification for one customer, or None when they are current."""
    balance = calculate_balance(customer.customer_id, transactions)
    if balance <= 0:
        return None

    payment = last_payment(customer.customer_id, transactions)
    if payment is not None and payment.timestamp >= cutoff:
        return None

    return Notification(
        customer_id=customer.customer_id,
        customer_name=customer.full_name,
        message=message,
        pending_balance=balance,
    )


def overdue_notifications(
    customers: Iterable[Customer],
    transactions: Iterable[Transaction],
    now: datetime | None = None,
    message: str = DEFAULT_MESSAGE,
) -> Iterator[Notification]:
    """Yield a notification for every customer who owes money and has not paid in a month.

    A customer is flagged when their balance is strictly positive and their
    latest payment is older than one calendar month before ``now``, or they
    never paid. Notifications follow the order of ``customers``.

    Parameters
    ----------
    customers : Iterable[Customer]
        Customer collection, in display order.
    transactions : Iterable[Transaction]
        Full transaction collection.
    now : datetime | None
        Reference time; defaults to the current time, timezone-aware UTC.
    message : str
        Text attached to every notification.

    Yields
    ------
    Notification
        One record per overdue customer.
    """
    cutoff = one_month_before(now or datetime.now(timezone.utc))
    transactions = list(transactions)
    for customer in customers:
        notification = notification_for(customer, transactions, cutoff, message)
        if notification is not None:
            yield notification
