"""Ledger service: in-memory collections kept in step with a store."""

from datetime import datetime
from decimal import Decimal
from typing import Iterator

from fiado.config import LedgerConfig
from fiado.exceptions import StoreError, ValidationError
from fiado.ledger import calculate_balance, filter_customers, overdue_notifications
from fiado.logging import get_logger
from fiado.models import (
    Customer,
    CustomerFields,
    NewTransaction,
    Notification,
    Transaction,
    TransactionKind,
    parse_amount,
)
from fiado.store import LedgerStore

logger = get_logger(__name__)


class LedgerService:
    """Customer account book backed by a ``LedgerStore``.

    Holds the full customer and transaction collections as last loaded
    from the store. Every mutation goes to the store first; the affected
    collection is re-fetched only when the mutation succeeds, so a failed
    call leaves the local collections exactly as they were.

    Parameters
    ----------
    store : LedgerStore
        Persistence backend.
    config : LedgerConfig | None
        Message texts and note template; defaults to ``LedgerConfig()``.
    """

    def __init__(self, store: LedgerStore, config: LedgerConfig | None = None) -> None:
        self.store = store
        self.config = config or LedgerConfig()
        self.customers: list[Customer] = []
        self.transactions: list[Transaction] = []

    # Loading

    def load(self) -> None:
        """Load both collections from the store."""
        self.refresh_customers()
        self.refresh_transactions()
        logger.info(
            "Loaded %d customers and %d transactions",
            len(self.customers),
            len(self.transactions),
        )

    def refresh_customers(self) -> bool:
        """Re-fetch customers; on failure log and keep the current list."""
        try:
            customers = self.store.list_customers()
        except StoreError:
            logger.exception("Error loading customers", extra={"operation": "list_customers"})
            return False
        self.customers = customers
        logger.debug("Refreshed %d customers", len(customers))
        return True

    def refresh_transactions(self) -> bool:
        """Re-fetch transactions; on failure log and keep the current list."""
        try:
            transactions = self.store.list_transactions()
        except StoreError:
            logger.exception(
                "Error loading transactions", extra={"operation": "list_transactions"}
            )
            return False
        self.transactions = transactions
        logger.debug("Refreshed %d transactions", len(transactions))
        return True

    # Queries

    def get_customer(self, customer_id: str) -> Customer | None:
        """Find a loaded customer by id."""
        return next((c for c in self.customers if c.customer_id == customer_id), None)

    def balance(self, customer_id: str) -> Decimal:
        """Current balance of a customer from the loaded transactions."""
        return calculate_balance(customer_id, self.transactions)

    def customer_transactions(self, customer_id: str) -> list[Transaction]:
        """A customer's transactions, newest first."""
        return [t for t in self.transactions if t.customer_id == customer_id]

    def search(self, query: str) -> list[Customer]:
        """Customers matching a free-text query on name and national ID."""
        return filter_customers(query, self.customers)

    def notifications(self, now: datetime | None = None) -> Iterator[Notification]:
        """Overdue customers, recomputed on every call."""
        return overdue_notifications(
            self.customers,
            self.transactions,
            now=now,
            message=self.config.reminder_message,
        )

    # Customer mutations

    def add_customer(self, fields: CustomerFields) -> Customer:
        """Validate and create a customer, then reload customers."""
        fields = fields.validate()
        try:
            customer = self.store.create_customer(fields)
        except StoreError:
            logger.exception(
                "Error adding customer (dni=%s)",
                fields.national_id,
                extra={"operation": "create_customer"},
            )
            raise
        logger.info(
            "Added customer %s",
            customer.customer_id,
            extra={"operation": "create_customer", "customer_id": customer.customer_id},
        )
        self.refresh_customers()
        return customer

    def update_customer(self, customer_id: str, fields: CustomerFields) -> None:
        """Validate and replace a customer's fields, then reload customers."""
        fields = fields.validate()
        try:
            self.store.update_customer(customer_id, fields)
        except StoreError:
            logger.exception(
                "Error updating customer %s",
                customer_id,
                extra={"operation": "update_customer", "customer_id": customer_id},
            )
            raise
        logger.info("Updated customer %s", customer_id)
        self.refresh_customers()

    def delete_customer(self, customer_id: str) -> None:
        """Delete a customer, then reload both collections.

        The customer's transactions stay in the store.
        """
        try:
            self.store.delete_customer(customer_id)
        except StoreError:
            logger.exception(
                "Error deleting customer %s",
                customer_id,
                extra={"operation": "delete_customer", "customer_id": customer_id},
            )
            raise
        logger.info("Deleted customer %s", customer_id)
        self.refresh_customers()
        self.refresh_transactions()

    # Transaction mutations

    def add_transaction(
        self,
        customer_id: str | None,
        kind: TransactionKind | str,
        amount: str | int | float | Decimal | None,
        note: str = "",
        timestamp: datetime | None = None,
    ) -> Transaction:
        """Validate and record a purchase or payment, then reload transactions.

        Raises
        ------
        ValidationError
            If no customer is given, the kind is unknown or the amount is
            missing, not numeric or negative. The store is not called.
        StoreError
            If the store rejects the insert.
        """
        if not customer_id:
            raise ValidationError("A customer must be selected")
        try:
            kind = TransactionKind.parse(kind)
        except ValueError as e:
            raise ValidationError(str(e)) from e
        new = NewTransaction(
            customer_id=customer_id,
            kind=kind,
            amount=parse_amount(amount),
            note=(note or "").strip(),
            timestamp=timestamp,
        )
        return self._record(new)

    def apply_increase(
        self, customer_id: str, percentage: str | int | float | Decimal
    ) -> Transaction | None:
        """Charge a percentage of the current balance as a new purchase.

        Does nothing and returns None when ``percentage`` is not positive.
        The balance is read from the loaded transactions; a write made in
        between by another session is not detected.

        Raises
        ------
        ValidationError
            If ``percentage`` is not a number, or the balance is negative
            (the increase would be a purchase with a negative amount).
        StoreError
            If the store rejects the insert.
        """
        try:
            percentage = Decimal(str(percentage))
        except ArithmeticError as e:
            raise ValidationError(f"Percentage is not a number: {percentage!r}") from e
        if not percentage.is_finite():
            raise ValidationError(f"Percentage is not a number: {percentage!r}")
        if percentage <= 0:
            return None

        balance = self.balance(customer_id)
        # Purchases are stored as non-negative amounts
        if balance < 0:
            raise ValidationError(f"Cannot apply an increase to a negative balance ({balance})")

        return self._record(
            NewTransaction(
                customer_id=customer_id,
                kind=TransactionKind.PURCHASE,
                amount=balance * percentage / 100,
                note=self.config.increase_note_template.format(percentage=percentage),
            )
        )

    def _record(self, new: NewTransaction) -> Transaction:
        context = {"operation": "create_transaction", "customer_id": new.customer_id}
        try:
            transaction = self.store.create_transaction(new)
        except StoreError:
            logger.exception(
                "Error adding %s of %s for customer %s",
                new.kind.name.lower(),
                new.amount,
                new.customer_id,
                extra=context,
            )
            raise
        logger.info(
            "Recorded %s of %s for customer %s",
            new.kind.name.lower(),
            new.amount,
            new.customer_id,
            extra={**context, "transaction_id": transaction.transaction_id},
        )
        self.refresh_transactions()
        return transaction
