"""In-memory ledger store for tests, demos and seeding dry runs."""

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Callable

from fiado.exceptions import EntityNotFoundError
from fiado.models import Customer, CustomerFields, NewTransaction, Transaction


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class InMemoryLedgerStore:
    """Dict-backed store with the same ordering guarantees as the database."""

    customers: dict[str, Customer] = field(default_factory=dict)
    transactions: list[Transaction] = field(default_factory=list)
    clock: Callable[[], datetime] = _utcnow

    def list_customers(self) -> list[Customer]:
        """Return all customers, newest first."""
        return sorted(self.customers.values(), key=lambda c: c.created_at, reverse=True)

    def list_transactions(self) -> list[Transaction]:
        """Return all transactions, newest first."""
        return sorted(self.transactions, key=lambda t: t.timestamp, reverse=True)

    def create_customer(self, fields: CustomerFields) -> Customer:
        """Add a customer to the store."""
        customer = Customer(
            customer_id=str(uuid.uuid4()),
            first_name=fields.first_name,
            last_name=fields.last_name,
            national_id=fields.national_id,
            phone=fields.phone,
            created_at=self.clock(),
        )
        self.customers[customer.customer_id] = customer
        return customer

    def update_customer(self, customer_id: str, fields: CustomerFields) -> None:
        """Replace a customer's editable fields."""
        if customer_id not in self.customers:
            raise EntityNotFoundError(f"Customer {customer_id} not found")
        self.customers[customer_id] = replace(
            self.customers[customer_id],
            first_name=fields.first_name,
            last_name=fields.last_name,
            national_id=fields.national_id,
            phone=fields.phone,
        )

    def delete_customer(self, customer_id: str) -> None:
        """Remove a customer, keeping its transactions."""
        if customer_id not in self.customers:
            raise EntityNotFoundError(f"Customer {customer_id} not found")
        del self.customers[customer_id]

    def create_transaction(self, transaction: NewTransaction) -> Transaction:
        """Add a transaction to the store.

        The customer reference is not checked, matching the database
        schema, which keeps transactions of deleted customers.
        """
        created = Transaction(
            transaction_id=str(uuid.uuid4()),
            customer_id=transaction.customer_id,
            timestamp=transaction.timestamp or self.clock(),
            kind=transaction.kind,
            amount=transaction.amount,
            note=transaction.note,
        )
        self.transactions.append(created)
        return created

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "customers": len(self.customers),
            "transactions": len(self.transactions),
        }
