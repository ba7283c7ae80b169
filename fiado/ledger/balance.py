"""Running balance of a customer's account."""

from decimal import Decimal
from typing import Iterable

from fiado.models import Transaction


def calculate_balance(customer_id: str, transactions: Iterable[Transaction]) -> Decimal:
    """Compute what a customer owes.

    Purchases add to the balance and payments subtract from it. The result
    may be negative when payments exceed purchases.

    Parameters
    ----------
    customer_id : str
        Customer whose transactions are summed.
    transactions : Iterable[Transaction]
        Full transaction collection; other customers' rows are ignored.

    Returns
    -------
    Decimal
        Signed balance, ``Decimal(0)`` when the customer has no transactions.
    """
    return sum(
        (t.signed_amount for t in transactions if t.customer_id == customer_id),
        Decimal(0),
    )
