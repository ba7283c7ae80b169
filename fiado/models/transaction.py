"""Transaction model for the ledger."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation

from fiado.exceptions import ValidationError
from fiado.models.enums import TransactionKind


@dataclass(frozen=True)
class Transaction:
    """A purchase or payment recorded against one customer.

    ``amount`` is never negative; the sign is implied by ``kind``.
    """

    transaction_id: str
    customer_id: str
    timestamp: datetime
    kind: TransactionKind
    amount: Decimal
    note: str = ""

    @property
    def signed_amount(self) -> Decimal:
        """Effect of this transaction on the customer's balance."""
        return self.amount if self.kind == TransactionKind.PURCHASE else -self.amount


@dataclass(frozen=True)
class NewTransaction:
    """Transaction data submitted to the store before it has an identifier.

    ``timestamp`` is left to the store (insertion time) unless given.
    """

    customer_id: str
    kind: TransactionKind
    amount: Decimal
    note: str = ""
    timestamp: datetime | None = None


def parse_amount(value: str | int | float | Decimal | None) -> Decimal:
    """Parse a user-entered amount into a non-negative Decimal.

    Raises
    ------
    ValidationError
        If the value is empty, not numeric, not finite or negative.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("Amount is required")
    if isinstance(value, bool):
        raise ValidationError(f"Amount is not a number: {value!r}")
    try:
        amount = Decimal(value.strip()) if isinstance(value, str) else Decimal(str(value))
    except InvalidOperation as e:
        raise ValidationError(f"Amount is not a number: {value!r}") from e
    if not amount.is_finite():
        raise ValidationError(f"Amount is not a number: {value!r}")
    if amount < 0:
        raise ValidationError(f"Amount must not be negative: {value!r}")
    return amount
