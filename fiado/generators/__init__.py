"""Sample ledger data generators."""

from fiado.generators.customer import CustomerGenerator
from fiado.generators.seed import populate
from fiado.generators.transaction import TransactionGenerator

__all__ = ["CustomerGenerator", "TransactionGenerator", "populate"]
