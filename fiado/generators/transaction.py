"""Transaction history generator."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from fiado.generators.base import BaseGenerator
from fiado.models import NewTransaction, TransactionKind


class TransactionGenerator(BaseGenerator):
    """Generate back-dated purchase/payment histories.

    Payments never exceed what is owed at the time they are made, so
    generated balances are never negative.
    """

    PURCHASE_RANGE = (500, 25000)
    PAYMENT_PROBABILITY = 0.35
    PURCHASE_NOTES = ["Almacén", "Bebidas", "Limpieza", "Verdulería", "Fiambrería", ""]

    def generate_history(
        self,
        customer_id: str,
        count: int | None = None,
        days: int = 120,
        now: datetime | None = None,
    ) -> list[NewTransaction]:
        """Generate a chronological history for one customer.

        Parameters
        ----------
        customer_id : str
            Owner of the transactions.
        count : int | None
            Number of transactions; random between 1 and 12 when None.
        days : int
            How far back the history may start.
        now : datetime | None
            End of the history window (default: current UTC time).

        Returns
        -------
        list[NewTransaction]
            Transactions sorted oldest first.
        """
        now = now or datetime.now(timezone.utc)
        count = count if count is not None else self.random.randint(1, 12)
        offsets = sorted(
            (self.random.randint(0, days * 24 * 60) for _ in range(count)), reverse=True
        )

        owed = Decimal(0)
        history: list[NewTransaction] = []
        for minutes_ago in offsets:
            timestamp = now - timedelta(minutes=minutes_ago)
            if owed > 0 and self.random.random() < self.PAYMENT_PROBABILITY:
                amount = self._payment_amount(owed)
                owed -= amount
                history.append(
                    NewTransaction(
                        customer_id=customer_id,
                        kind=TransactionKind.PAYMENT,
                        amount=amount,
                        note="Pago en efectivo",
                        timestamp=timestamp,
                    )
                )
            else:
                amount = Decimal(self.random.randint(*self.PURCHASE_RANGE))
                owed += amount
                history.append(
                    NewTransaction(
                        customer_id=customer_id,
                        kind=TransactionKind.PURCHASE,
                        amount=amount,
                        note=self.random.choice(self.PURCHASE_NOTES),
                        timestamp=timestamp,
                    )
                )
        return history

    def _payment_amount(self, owed: Decimal) -> Decimal:
        """Pay off everything half the time, otherwise a round part of it."""
        if self.random.random() < 0.5:
            return owed
        share = Decimal(self.random.randint(20, 80)) / 100
        return max(Decimal(1), (owed * share).quantize(Decimal(1)))
