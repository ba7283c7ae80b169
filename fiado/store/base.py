"""Interface every ledger store implements."""

from typing import Protocol

from fiado.models import Customer, CustomerFields, NewTransaction, Transaction


class LedgerStore(Protocol):
    """Query/mutate interface over the ``clientes`` and ``transacciones`` tables.

    Every method raises ``StoreError`` on failure.
    """

    def list_customers(self) -> list[Customer]:
        """Return all customers, newest first."""
        ...

    def list_transactions(self) -> list[Transaction]:
        """Return all transactions, newest first."""
        ...

    def create_customer(self, fields: CustomerFields) -> Customer:
        """Insert a customer and return it with its store-assigned id."""
        ...

    def update_customer(self, customer_id: str, fields: CustomerFields) -> None:
        """Replace every editable field of a customer."""
        ...

    def delete_customer(self, customer_id: str) -> None:
        """Delete a customer. Its transactions are left in place."""
        ...

    def create_transaction(self, transaction: NewTransaction) -> Transaction:
        """Insert a transaction and return it with its id and timestamp."""
        ...
