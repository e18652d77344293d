"""Storage session backed by MongoDB."""

from dataclasses import dataclass, replace
from typing import Any

from pymongo.asynchronous.collection import AsyncCollection

from ...domain import CollectionDescriptor, OrderSpec
from ...storage import Predicate, to_mongo_filter
from .config import MongoConfiguration


@dataclass(frozen=True)
class MongoSequence:
    """Filterable sequence translated into a MongoDB find.

    Predicates become a conjunctive filter document, the order spec a
    sort specification, and skip/take map onto cursor skip/limit.
    """

    descriptor: CollectionDescriptor
    collection: AsyncCollection[dict[str, Any]]
    predicates: tuple[Predicate, ...] = ()
    ordering: OrderSpec | None = None
    offset: int = 0
    limit: int | None = None

    @property
    def filter(self) -> dict[str, Any]:
        return to_mongo_filter(self.predicates)

    def where(self, predicate: Predicate) -> "MongoSequence":
        return replace(self, predicates=(*self.predicates, predicate))

    def order_by(self, spec: OrderSpec) -> "MongoSequence":
        return replace(self, ordering=spec)

    def skip(self, count: int) -> "MongoSequence":
        return replace(self, offset=self.offset + count)

    def take(self, count: int) -> "MongoSequence":
        limit = count if self.limit is None else min(self.limit, count)
        return replace(self, limit=limit)

    async def count(self) -> int:
        return await self.collection.count_documents(self.filter)

    async def to_list(self) -> list[Any]:
        if self.limit == 0:
            # PyMongo treats a limit of 0 as "no limit"
            return []

        cursor = self.collection.find(self.filter, projection={"_id": False})
        if self.ordering:
            cursor = cursor.sort(self.ordering.to_mongo())
        if self.offset:
            cursor = cursor.skip(self.offset)
        if self.limit is not None:
            cursor = cursor.limit(self.limit)

        return [self.descriptor.to_record(doc) async for doc in cursor]


class MongoStorageSession:
    """Storage session reading documents from MongoDB.

    Documents are stored with the record model's attribute names, so a
    record can be saved with ``record.model_dump()``.

    Example:
        >>> session = MongoStorageSession(MongoConfiguration())
        >>> await session.insert(PLAYERS, player)
        >>> await session.query(PLAYERS).count()
        1
    """

    def __init__(self, config: MongoConfiguration):
        self.config = config

    def query(self, collection: CollectionDescriptor) -> MongoSequence:
        return MongoSequence(
            descriptor=collection,
            collection=self.config.collection(collection.collection_name),
        )

    async def insert(self, collection: CollectionDescriptor, *records: Any) -> None:
        """Store records in a collection, mainly for seeding and tests."""
        documents = [
            record.model_dump() if hasattr(record, "model_dump") else dict(record)
            for record in records
        ]
        if documents:
            await self.config.collection(collection.collection_name).insert_many(documents)
