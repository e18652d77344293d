"""In-memory storage session for tests and local development."""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from pydantic import BaseModel

from ..domain import CollectionDescriptor, OrderSpec
from .filters import Predicate


@dataclass(frozen=True)
class InMemorySequence:
    """Filterable sequence evaluated over a list of documents."""

    collection: CollectionDescriptor
    documents: tuple[Mapping[str, Any], ...]
    predicates: tuple[Predicate, ...] = ()
    ordering: OrderSpec | None = None
    offset: int = 0
    limit: int | None = None

    def where(self, predicate: Predicate) -> "InMemorySequence":
        return replace(self, predicates=(*self.predicates, predicate))

    def order_by(self, spec: OrderSpec) -> "InMemorySequence":
        return replace(self, ordering=spec)

    def skip(self, count: int) -> "InMemorySequence":
        return replace(self, offset=self.offset + count)

    def take(self, count: int) -> "InMemorySequence":
        limit = count if self.limit is None else min(self.limit, count)
        return replace(self, limit=limit)

    def _filtered(self) -> list[Mapping[str, Any]]:
        return [
            doc
            for doc in self.documents
            if all(predicate.matches(doc) for predicate in self.predicates)
        ]

    async def count(self) -> int:
        return len(self._filtered())

    async def to_list(self) -> list[Any]:
        documents = self._filtered()
        if self.ordering is not None:
            documents = self.ordering.sort(documents)
        end = None if self.limit is None else self.offset + self.limit
        return [self.collection.to_record(dict(doc)) for doc in documents[self.offset : end]]


@dataclass
class InMemoryStorageSession:
    """Storage session holding documents in memory, keyed by collection name.

    Example:
        >>> session = InMemoryStorageSession()
        >>> session.add(PLAYERS, SuperCoachPlayer(player_id=1, team_id=7))
        >>> await session.query(PLAYERS).where(Equals(field="team_id", value=7)).count()
        1
    """

    documents: dict[str, list[dict[str, Any]]] = field(default_factory=dict)

    def add(
        self, collection: CollectionDescriptor, *records: BaseModel | Mapping[str, Any]
    ) -> None:
        """Store records in a collection.

        Models are dumped to plain documents so that the session behaves
        like a document store rather than an object cache.
        """
        bucket = self.documents.setdefault(collection.collection_name, [])
        for record in records:
            if isinstance(record, BaseModel):
                bucket.append(record.model_dump())
            else:
                bucket.append(dict(record))

    def query(self, collection: CollectionDescriptor) -> InMemorySequence:
        return InMemorySequence(
            collection=collection,
            documents=tuple(self.documents.get(collection.collection_name, ())),
        )
