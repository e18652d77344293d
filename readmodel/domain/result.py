"""Result of executing a query shape against a collection."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class QueryResult:
    """A page of records together with the unpaginated match count.

    Attributes:
        items: The records on the requested page, in order.
        total_count: Number of records matching the filters, computed
            before skip/take were applied.
        skip: Number of records skipped.
        take: Maximum page size, or None when the page is unbounded.
    """

    items: Sequence[Any]
    total_count: int
    skip: int = 0
    take: int | None = None
