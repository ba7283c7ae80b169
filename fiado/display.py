"""Text formatting for balances and transactions."""

from decimal import ROUND_HALF_UP, Decimal

from fiado.models import Transaction, TransactionKind

CENTS = Decimal("0.01")


def format_money(amount: Decimal, symbol: str = "$") -> str:
    """Format an amount with two decimals, e.g. ``$150.00`` or ``-$20.50``."""
    rounded = Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):.2f}"


def balance_status(balance: Decimal) -> str:
    """Label shown next to a customer's balance."""
    return "Debe" if balance > 0 else "Al día"


def format_transaction(transaction: Transaction, symbol: str = "$") -> str:
    """One history line: kind, date, signed amount and note."""
    if transaction.kind == TransactionKind.PURCHASE:
        label, sign = "Compra", "+"
    else:
        label, sign = "Pago", "-"
    line = (
        f"{transaction.timestamp:%d/%m/%Y}  {label:<6}  "
        f"{sign}{format_money(transaction.amount, symbol)}"
    )
    if transaction.note:
        line += f"  {transaction.note}"
    return line
