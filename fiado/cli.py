"""Command line front end for the customer account book."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Callable

from fiado.config import LedgerConfig
from fiado.display import balance_status, format_money, format_transaction
from fiado.exceptions import FiadoError, StoreError, ValidationError
from fiado.logging import get_logger, setup_logging
from fiado.models import CustomerFields, TransactionKind
from fiado.serialization import to_dict
from fiado.service import LedgerService
from fiado.store import LedgerStore

logger = get_logger(__name__)

EXIT_FAILURE = 1
EXIT_INVALID = 2


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(
        prog="fiado",
        description="Customer account book: balances, payments and overdue reminders",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Override LOG_LEVEL (DEBUG, INFO, WARNING, ERROR)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create the clientes/transacciones tables")

    customers = sub.add_parser("customers", help="List customers with their balances")
    customers.add_argument("--search", type=str, default="", help="Filter by name or DNI")

    show = sub.add_parser("show", help="Show a customer's balance and history")
    show.add_argument("customer_id")

    notifications = sub.add_parser("notifications", help="List customers overdue on payment")
    notifications.add_argument("--json", action="store_true", help="Print JSON instead of text")

    add_customer = sub.add_parser("add-customer", help="Register a new customer")
    add_customer.add_argument("--first-name", required=True)
    add_customer.add_argument("--last-name", required=True)
    add_customer.add_argument("--dni", required=True, help="National ID")
    add_customer.add_argument("--phone", default="")

    edit_customer = sub.add_parser("edit-customer", help="Change a customer's details")
    edit_customer.add_argument("customer_id")
    edit_customer.add_argument("--first-name")
    edit_customer.add_argument("--last-name")
    edit_customer.add_argument("--dni", help="National ID")
    edit_customer.add_argument("--phone")

    delete_customer = sub.add_parser("delete-customer", help="Delete a customer")
    delete_customer.add_argument("customer_id")
    delete_customer.add_argument("--yes", action="store_true", help="Do not ask for confirmation")

    add_tx = sub.add_parser("add-transaction", help="Record a purchase or payment")
    add_tx.add_argument("customer_id")
    add_tx.add_argument(
        "--kind",
        choices=[k.value for k in TransactionKind] + [k.name.lower() for k in TransactionKind],
        default=TransactionKind.PURCHASE.value,
    )
    add_tx.add_argument("--amount", required=True)
    add_tx.add_argument("--note", default="")

    increase = sub.add_parser("increase", help="Charge a percentage of the current balance")
    increase.add_argument("customer_id")
    increase.add_argument("percentage")

    seed = sub.add_parser("seed", help="Fill the ledger with sample data")
    seed.add_argument(
        "--customers",
        type=int,
        default=20,
        help="Number of customers to generate (default: 20)",
    )
    seed.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")

    return parser


def open_store(config: LedgerConfig) -> LedgerStore:
    """Connect to the configured PostgreSQL database."""
    from fiado.store.postgres import PostgresLedgerStore

    return PostgresLedgerStore(config.postgres.connection_string)


def main(
    argv: list[str] | None = None,
    store_factory: Callable[[LedgerConfig], LedgerStore] = open_store,
) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = LedgerConfig.from_env()
    except FiadoError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_INVALID
    setup_logging(level=args.log_level or config.log_level, format_type=config.log_format)

    try:
        store = store_factory(config)
    except StoreError as e:
        logger.error("Could not open ledger store: %s", e)
        print("The operation failed, please try again.", file=sys.stderr)
        return EXIT_FAILURE

    try:
        if args.command == "init-db":
            return cmd_init_db(store)
        service = LedgerService(store, config)
        service.load()
        return COMMANDS[args.command](service, args)
    except ValidationError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return EXIT_INVALID
    except StoreError as e:
        logger.debug("Command %s failed: %s", args.command, e)
        print("The operation failed, please try again.", file=sys.stderr)
        return EXIT_FAILURE
    finally:
        close = getattr(store, "close", None)
        if close is not None:
            close()


def cmd_init_db(store: LedgerStore) -> int:
    create_schema = getattr(store, "create_schema", None)
    if create_schema is None:
        print("This store needs no schema.")
        return 0
    create_schema()
    print("Tables clientes and transacciones are ready.")
    return 0


def cmd_customers(service: LedgerService, args: argparse.Namespace) -> int:
    symbol = service.config.currency_symbol
    customers = service.search(args.search)
    if not customers:
        print("No hay clientes registrados")
        return 0
    for customer in customers:
        balance = service.balance(customer.customer_id)
        print(
            f"{customer.customer_id}  {customer.full_name:<30}  DNI {customer.national_id:<10}  "
            f"{format_money(balance, symbol):>12}  {balance_status(balance)}"
        )
    return 0


def cmd_show(service: LedgerService, args: argparse.Namespace) -> int:
    customer = service.get_customer(args.customer_id)
    if customer is None:
        print(f"Customer {args.customer_id} not found", file=sys.stderr)
        return EXIT_FAILURE

    symbol = service.config.currency_symbol
    print(customer.full_name)
    print(f"DNI: {customer.national_id}")
    if customer.phone:
        print(f"Teléfono: {customer.phone}")
    print(f"Saldo: {format_money(service.balance(customer.customer_id), symbol)}")
    print()
    for transaction in service.customer_transactions(customer.customer_id):
        print(format_transaction(transaction, symbol))
    return 0


def cmd_notifications(service: LedgerService, args: argparse.Namespace) -> int:
    notifications = list(service.notifications())
    if args.json:
        print(json.dumps([to_dict(n) for n in notifications], ensure_ascii=False, indent=2))
        return 0
    if not notifications:
        print("No hay notificaciones pendientes")
        return 0
    symbol = service.config.currency_symbol
    for notification in notifications:
        print(
            f"{notification.customer_name}: {notification.message} "
            f"(saldo pendiente {format_money(notification.pending_balance, symbol)})"
        )
    return 0


def cmd_add_customer(service: LedgerService, args: argparse.Namespace) -> int:
    customer = service.add_customer(
        CustomerFields(
            first_name=args.first_name,
            last_name=args.last_name,
            national_id=args.dni,
            phone=args.phone,
        )
    )
    print(f"Added {customer.full_name} ({customer.customer_id})")
    return 0


def cmd_edit_customer(service: LedgerService, args: argparse.Namespace) -> int:
    customer = service.get_customer(args.customer_id)
    if customer is None:
        print(f"Customer {args.customer_id} not found", file=sys.stderr)
        return EXIT_FAILURE

    current = customer.fields
    service.update_customer(
        customer.customer_id,
        CustomerFields(
            first_name=current.first_name if args.first_name is None else args.first_name,
            last_name=current.last_name if args.last_name is None else args.last_name,
            national_id=current.national_id if args.dni is None else args.dni,
            phone=current.phone if args.phone is None else args.phone,
        ),
    )
    print(f"Updated {args.customer_id}")
    return 0


def cmd_delete_customer(service: LedgerService, args: argparse.Namespace) -> int:
    customer = service.get_customer(args.customer_id)
    if customer is None:
        print(f"Customer {args.customer_id} not found", file=sys.stderr)
        return EXIT_FAILURE
    if not args.yes:
        try:
            answer = input(f"¿Está seguro de eliminar a {customer.full_name}? [s/N] ")
        except (EOFError, KeyboardInterrupt):
            answer = ""
            print()
        if answer.strip().lower() not in ("s", "si", "sí", "y", "yes"):
            print("Cancelled")
            return 0
    service.delete_customer(customer.customer_id)
    print(f"Deleted {customer.full_name}")
    return 0


def cmd_add_transaction(service: LedgerService, args: argparse.Namespace) -> int:
    if service.get_customer(args.customer_id) is None:
        print(f"Customer {args.customer_id} not found", file=sys.stderr)
        return EXIT_FAILURE
    transaction = service.add_transaction(args.customer_id, args.kind, args.amount, args.note)
    symbol = service.config.currency_symbol
    print(format_transaction(transaction, symbol))
    print(f"Saldo: {format_money(service.balance(args.customer_id), symbol)}")
    return 0


def cmd_increase(service: LedgerService, args: argparse.Namespace) -> int:
    if service.get_customer(args.customer_id) is None:
        print(f"Customer {args.customer_id} not found", file=sys.stderr)
        return EXIT_FAILURE
    transaction = service.apply_increase(args.customer_id, args.percentage)
    if transaction is None:
        print("Nothing to apply: the percentage must be greater than zero")
        return 0
    symbol = service.config.currency_symbol
    print(
        f"Se aplicó un aumento del {args.percentage}% "
        f"({format_money(transaction.amount, symbol)})"
    )
    return 0


def cmd_seed(service: LedgerService, args: argparse.Namespace) -> int:
    from fiado.generators import populate

    seed = args.seed if args.seed is not None else service.config.seed
    counts = populate(service.store, args.customers, seed=seed)
    print(f"Created {counts['customers']} customers and {counts['transactions']} transactions")
    return 0


COMMANDS: dict[str, Callable[[LedgerService, argparse.Namespace], int]] = {
    "customers": cmd_customers,
    "show": cmd_show,
    "notifications": cmd_notifications,
    "add-customer": cmd_add_customer,
    "edit-customer": cmd_edit_customer,
    "delete-customer": cmd_delete_customer,
    "add-transaction": cmd_add_transaction,
    "increase": cmd_increase,
    "seed": cmd_seed,
}


if __name__ == "__main__":
    sys.exit(main())
