"""Storage session interfaces consumed by query handlers.

A storage session is owned by the caller for the lifetime of one request.
Handlers ask it for a ``FilterableSequence`` over a collection and narrow,
count, order and page that sequence before materializing it.
"""

from typing import Any, Protocol, runtime_checkable

from ..domain import CollectionDescriptor, OrderSpec
from .filters import Predicate


@runtime_checkable
class FilterableSequence(Protocol):
    """A lazily evaluated, immutable view over a collection.

    Every narrowing operation returns a new sequence; nothing touches
    storage until ``count`` or ``to_list`` is awaited.
    """

    def where(self, predicate: Predicate) -> "FilterableSequence":
        """Return a sequence additionally constrained by ``predicate``."""
        ...

    def order_by(self, spec: OrderSpec) -> "FilterableSequence":
        """Return a sequence ordered by ``spec``."""
        ...

    def skip(self, count: int) -> "FilterableSequence":
        """Return a sequence that starts ``count`` records later."""
        ...

    def take(self, count: int) -> "FilterableSequence":
        """Return a sequence of at most ``count`` records."""
        ...

    async def count(self) -> int:
        """Count records matching the filters, ignoring skip and take."""
        ...

    async def to_list(self) -> list[Any]:
        """Materialize the sequence into records."""
        ...


@runtime_checkable
class StorageSession(Protocol):
    """Entry point into the document store for a single request."""

    def query(self, collection: CollectionDescriptor) -> FilterableSequence:
        """Open a sequence over every record in ``collection``."""
        ...
