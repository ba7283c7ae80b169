"""Populate a ledger store with sample customers and histories."""

from __future__ import annotations

import time
from datetime import datetime

from fiado.generators.customer import CustomerGenerator
from fiado.generators.transaction import TransactionGenerator
from fiado.logging import get_logger
from fiado.store import LedgerStore

logger = get_logger(__name__)


def populate(
    store: LedgerStore,
    num_customers: int,
    seed: int | None = None,
    now: datetime | None = None,
) -> dict[str, int]:
    """Create ``num_customers`` customers with random histories.

    Returns
    -------
    dict[str, int]
        Number of customers and transactions written.
    """
    customer_gen = CustomerGenerator(seed=seed)
    transaction_gen = TransactionGenerator(seed=seed)
    counts = {"customers": 0, "transactions": 0}

    t0 = time.perf_counter()
    for fields in customer_gen.generate_batch(num_customers):
        customer = store.create_customer(fields)
        counts["customers"] += 1
        for new in transaction_gen.generate_history(customer.customer_id, now=now):
            store.create_transaction(new)
            counts["transactions"] += 1
    logger.info(
        "Seeded %d customers and %d transactions in %.1fs",
        counts["customers"],
        counts["transactions"],
        time.perf_counter() - t0,
    )
    return counts
