"""PostgreSQL ledger store (Supabase-compatible schema)."""

from __future__ import annotations

from typing import Any

import psycopg
from psycopg.rows import dict_row

from fiado.exceptions import EntityNotFoundError, StoreError
from fiado.logging import get_logger
from fiado.models import (
    Customer,
    CustomerFields,
    NewTransaction,
    Transaction,
    TransactionKind,
)

logger = get_logger(__name__)

# Transactions carry no foreign key so that deleting a customer keeps its history
SCHEMA_DDL = """
CREATE TABLE IF NOT EXISTS clientes (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    nombre TEXT NOT NULL,
    apellido TEXT NOT NULL,
    dni TEXT NOT NULL,
    telefono TEXT NOT NULL DEFAULT '',
    fecha_creacion TIMESTAMPTZ NOT NULL DEFAULT now()
);

CREATE TABLE IF NOT EXISTS transacciones (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    cliente_id UUID NOT NULL,
    fecha TIMESTAMPTZ NOT NULL DEFAULT now(),
    tipo TEXT NOT NULL CHECK (tipo IN ('compra', 'pago')),
    monto NUMERIC NOT NULL CHECK (monto >= 0),
    observacion TEXT NOT NULL DEFAULT ''
);

CREATE INDEX IF NOT EXISTS idx_transacciones_cliente_id ON transacciones (cliente_id);
"""

CUSTOMER_COLUMNS = "id, nombre, apellido, dni, telefono, fecha_creacion"
TRANSACTION_COLUMNS = "id, cliente_id, fecha, tipo, monto, observacion"


def customer_from_row(row: dict[str, Any]) -> Customer:
    """Map a ``clientes`` row to a Customer."""
    return Customer(
        customer_id=str(row["id"]),
        first_name=row["nombre"],
        last_name=row["apellido"],
        national_id=row["dni"],
        phone=row["telefono"] or "",
        created_at=row["fecha_creacion"],
    )


def transaction_from_row(row: dict[str, Any]) -> Transaction:
    """Map a ``transacciones`` row to a Transaction."""
    return Transaction(
        transaction_id=str(row["id"]),
        customer_id=str(row["cliente_id"]),
        timestamp=row["fecha"],
        kind=TransactionKind(row["tipo"]),
        amount=row["monto"],
        note=row["observacion"] or "",
    )


class PostgresLedgerStore:
    """Ledger store backed by the ``clientes`` and ``transacciones`` tables.

    Parameters
    ----------
    connection_string : str
        libpq connection string or URL.
    """

    def __init__(self, connection_string: str) -> None:
        try:
            self.conn = psycopg.connect(connection_string, row_factory=dict_row)
        except psycopg.Error as e:
            raise StoreError(f"Could not connect to ledger database: {e}") from e

    def create_schema(self) -> None:
        """Create the ledger tables if they do not exist."""
        self._execute("create schema", SCHEMA_DDL)
        logger.info("Ledger schema ready")

    def list_customers(self) -> list[Customer]:
        """Return all customers, newest first."""
        rows = self._fetch(
            "list customers",
            f"SELECT {CUSTOMER_COLUMNS} FROM clientes ORDER BY fecha_creacion DESC",
        )
        return [customer_from_row(row) for row in rows]

    def list_transactions(self) -> list[Transaction]:
        """Return all transactions, newest first."""
        rows = self._fetch(
            "list transactions",
            f"SELECT {TRANSACTION_COLUMNS} FROM transacciones ORDER BY fecha DESC",
        )
        return [transaction_from_row(row) for row in rows]

    def create_customer(self, fields: CustomerFields) -> Customer:
        """Insert a customer and return the stored row."""
        rows = self._fetch(
            "create customer",
            f"""
            INSERT INTO clientes (nombre, apellido, dni, telefono)
            VALUES (%(nombre)s, %(apellido)s, %(dni)s, %(telefono)s)
            RETURNING {CUSTOMER_COLUMNS}
            """,
            self._customer_params(fields),
        )
        return customer_from_row(rows[0])

    def update_customer(self, customer_id: str, fields: CustomerFields) -> None:
        """Replace every editable field of a customer."""
        params = self._customer_params(fields)
        params["id"] = customer_id
        updated = self._execute(
            "update customer",
            """
            UPDATE clientes
            SET nombre = %(nombre)s, apellido = %(apellido)s,
                dni = %(dni)s, telefono = %(telefono)s
            WHERE id = %(id)s
            """,
            params,
        )
        if updated == 0:
            raise EntityNotFoundError(f"Customer {customer_id} not found")

    def delete_customer(self, customer_id: str) -> None:
        """Delete a customer row; transactions are not touched."""
        deleted = self._execute(
            "delete customer",
            "DELETE FROM clientes WHERE id = %(id)s",
            {"id": customer_id},
        )
        if deleted == 0:
            raise EntityNotFoundError(f"Customer {customer_id} not found")

    def create_transaction(self, transaction: NewTransaction) -> Transaction:
        """Insert a transaction; the database stamps it unless a timestamp is given."""
        rows = self._fetch(
            "create transaction",
            f"""
            INSERT INTO transacciones (cliente_id, fecha, tipo, monto, observacion)
            VALUES (%(cliente_id)s, COALESCE(%(fecha)s::timestamptz, now()),
                    %(tipo)s, %(monto)s, %(observacion)s)
            RETURNING {TRANSACTION_COLUMNS}
            """,
            {
                "cliente_id": transaction.customer_id,
                "fecha": transaction.timestamp,
                "tipo": transaction.kind.value,
                "monto": transaction.amount,
                "observacion": transaction.note,
            },
        )
        return transaction_from_row(rows[0])

    def close(self) -> None:
        """Close the database connection."""
        self.conn.close()

    def __enter__(self) -> PostgresLedgerStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @staticmethod
    def _customer_params(fields: CustomerFields) -> dict[str, Any]:
        return {
            "nombre": fields.first_name,
            "apellido": fields.last_name,
            "dni": fields.national_id,
            "telefono": fields.phone,
        }

    def _fetch(
        self, operation: str, query: str, params: dict[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """Run a query that returns rows and commit."""
        try:
            with self.conn.cursor() as cur:
                cur.execute(query, params)
                rows = cur.fetchall()
            self.conn.commit()
        except psycopg.Error as e:
            self._rollback()
            raise StoreError(f"Failed to {operation}: {e}") from e
        return rows

    def _execute(
        self, operation: str, query: str, params: dict[str, Any] | None = None
    ) -> int:
        """Run a statement, commit, and return the affected row count."""
        try:
            with self.conn.cursor() as cur:
                cur.execute(query, params)
                count = cur.rowcount
            self.conn.commit()
        except psycopg.Error as e:
            self._rollback()
            raise StoreError(f"Failed to {operation}: {e}") from e
        return count

    def _rollback(self) -> None:
        # A lost connection cannot roll back; the original error is reported instead
        try:
            self.conn.rollback()
        except psycopg.Error as e:
            logger.warning("Rollback failed: %s", e)
