"""Customer search."""

from typing import Iterable

from fiado.models import Customer


def search_key(customer: Customer) -> str:
    """Text a search query is matched against."""
    return f"{customer.first_name} {customer.last_name} {customer.national_id}".lower()


def filter_customers(query: str, customers: Iterable[Customer]) -> list[Customer]:
    """Return customers whose name or national ID contains ``query``, ignoring case.

    An empty query matches every customer. Order is preserved.
    """
    needle = (query or "").lower()
    return [c for c in customers if needle in search_key(c)]
