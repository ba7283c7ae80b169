"""Ledger domain models."""

from fiado.models.customer import Customer, CustomerFields
from fiado.models.enums import TransactionKind
from fiado.models.notification import Notification
from fiado.models.transaction import NewTransaction, Transaction, parse_amount

__all__ = [
    "Customer",
    "CustomerFields",
    "NewTransaction",
    "Notification",
    "Transaction",
    "TransactionKind",
    "parse_amount",
]
