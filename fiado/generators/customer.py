"""Customer generator."""

from __future__ import annotations

from typing import Iterator

from fiado.generators.base import BaseGenerator
from fiado.models import CustomerFields


class CustomerGenerator(BaseGenerator):
    """Generate customer form input for sample ledgers."""

    # Share of customers registered with a phone number
    PHONE_RATE = 0.8

    def generate(self) -> CustomerFields:
        """Generate a single customer.

        Returns
        -------
        CustomerFields
            Fields ready to pass to ``LedgerStore.create_customer``.
        """
        phone = self.fake.phone_number() if self.random.random() < self.PHONE_RATE else ""
        return CustomerFields(
            first_name=self.fake.first_name(),
            last_name=self.fake.last_name(),
            national_id=self.fake.numerify("########"),
            phone=phone,
        )

    def generate_batch(self, count: int) -> Iterator[CustomerFields]:
        """Generate multiple customers.

        Parameters
        ----------
        count : int
            Number of customers to generate.

        Yields
        ------
        CustomerFields
            Generated customers.
        """
        for _ in range(count):
            yield self.generate()
