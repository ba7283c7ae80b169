"""Enumeration types for ledger entities."""

from enum import Enum


class TransactionKind(str, Enum):
    """Kind of a ledger movement, stored with its Spanish column value."""

    PURCHASE = "compra"
    PAYMENT = "pago"

    @classmethod
    def parse(cls, value: "str | TransactionKind") -> "TransactionKind":
        """Accept either the stored value or the member name (any case)."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for kind in cls:
            if text in (kind.value, kind.name.lower()):
                return kind
        raise ValueError(f"Unknown transaction kind: {value!r}")
