"""Query handlers and the dispatcher that binds shapes to them."""

import inspect
import logging
from collections.abc import Iterable
from typing import Any, ClassVar

from ..domain import (
    CollectionDescriptor,
    DuplicateHandler,
    HandlerCollectionMissing,
    InvalidPagination,
    NoHandlerRegistered,
    QueryResult,
    SearchQuery,
    UnsupportedCollection,
)
from ..routing import MessageRouter, handled_query_types, setup_query_routing
from ..storage import FilterableSequence, StorageSession
from .ordering import OrderingCompiler

LOGGER = logging.getLogger(__name__)


class QueryHandler:
    """Base class for handlers executing query shapes against a collection.

    A handler serves one collection and one or more query shapes. For each
    shape it provides a ``@handles_query`` method that narrows the
    collection with that shape's filters. The base class does the rest:

    1. Reject collections other than the one the handler serves.
    2. Apply the shape's filters.
    3. Count the filtered records before any paging.
    4. Order by the compiled orderBy, then skip and take.
    5. Materialize the page.

    Filter methods may be plain or async and must return the narrowed
    sequence. Each present filter contributes one predicate; absent
    optional fields contribute none.

    Example:
        >>> class PlayersByTeamHandler(QueryHandler):
        ...     collection = SUPERCOACH_PLAYERS
        ...
        ...     @handles_query
        ...     def filter(
        ...         self, query: PlayersByTeam, records: FilterableSequence
        ...     ) -> FilterableSequence:
        ...         records = records.where(Equals(field="team_id", value=query.team_id))
        ...         if query.season is not None:
        ...             records = records.where(Equals(field="season", value=query.season))
        ...         return records

    Attributes:
        collection: The collection this handler serves.
        ordering: Compiler used to turn orderBy strings into sort keys.
    """

    collection: ClassVar[CollectionDescriptor]

    # Class-level routing table
    _query_router: ClassVar[MessageRouter]

    def __init_subclass__(cls, **kwargs: object) -> None:
        """Set up query routing when a subclass is defined."""
        super().__init_subclass__(**kwargs)
        cls._query_router = setup_query_routing(cls)

    def __init__(self, ordering: OrderingCompiler | None = None):
        self.ordering = ordering or OrderingCompiler()

    @classmethod
    def query_types(cls) -> list[type[SearchQuery]]:
        """The query shapes this handler executes."""
        return handled_query_types(cls)

    def check_collection(self, collection: CollectionDescriptor) -> None:
        """Ensure the caller-resolved collection is the one this handler serves.

        The query shape and the data type are resolved independently, so
        nothing else guarantees they agree.

        Raises:
            UnsupportedCollection: If the collections differ.
        """
        if collection.name != self.collection.name:
            raise UnsupportedCollection(
                type(self).__name__, self.collection.name, collection.name
            )

    async def apply_filters(
        self, query: SearchQuery, records: FilterableSequence
    ) -> FilterableSequence:
        """Route the query to its ``@handles_query`` method."""
        result: Any = self._query_router.route(self, query, records)
        if inspect.isawaitable(result):
            result = await result
        return result  # type: ignore[no-any-return]

    async def handle(
        self,
        query: SearchQuery,
        collection: CollectionDescriptor,
        order_by: str | None,
        skip: int,
        take: int | None,
        session: StorageSession,
    ) -> QueryResult:
        """Execute a query shape and return one page of results.

        Args:
            query: The decoded query shape.
            collection: The collection the caller asked for.
            order_by: The caller's orderBy string.
            skip: Records to skip.
            take: Page size, or None for every remaining record.
            session: The caller's storage session for this request.

        Returns:
            The page of records with the unpaginated total count.

        Raises:
            UnsupportedCollection: If the collection is not served here.
        """
        self.check_collection(collection)
        spec = self.ordering.compile(order_by, collection)

        records = await self.apply_filters(query, session.query(collection))
        total_count = await records.count()

        page = records.order_by(spec).skip(skip)
        if take is not None:
            page = page.take(take)
        items = await page.to_list()
        return QueryResult(items=items, total_count=total_count, skip=skip, take=take)


class HandlerRegistry:
    """Maps each concrete query shape to the single handler executing it.

    Lookups use the exact runtime type of the shape; a handler registered
    for a base shape is never picked for a subclass.
    """

    @staticmethod
    def from_handlers(handlers: Iterable[QueryHandler]) -> "HandlerRegistry":
        """Build a registry from handler instances.

        Args:
            handlers: Handler instances to register.

        Returns:
            A configured HandlerRegistry.

        Raises:
            DuplicateHandler: If two handlers claim the same shape.
        """
        registry = HandlerRegistry()
        for handler in handlers:
            registry.add(handler)
        return registry

    def __init__(self) -> None:
        self.handlers: dict[type[SearchQuery], QueryHandler] = {}

    def add(self, handler: QueryHandler) -> None:
        """Register a handler for every shape it declares.

        Args:
            handler: The handler instance to register.

        Raises:
            HandlerCollectionMissing: If the handler names no collection.
            DuplicateHandler: If a shape already has a different handler.
        """
        if not isinstance(getattr(handler, "collection", None), CollectionDescriptor):
            raise HandlerCollectionMissing(type(handler))
        for query_type in handler.query_types():
            existing = self.handlers.get(query_type)
            if existing is not None and existing is not handler:
                raise DuplicateHandler(query_type, type(existing), type(handler))
            self.handlers[query_type] = handler

    def get(self, query_type: type[SearchQuery]) -> QueryHandler:
        """Get the handler for a query shape.

        Args:
            query_type: The concrete shape class.

        Returns:
            The registered handler.

        Raises:
            NoHandlerRegistered: If no handler executes this shape.
        """
        try:
            return self.handlers[query_type]
        except KeyError:
            raise NoHandlerRegistered(query_type) from None

    def __contains__(self, query_type: object) -> bool:
        return query_type in self.handlers


class QueryDispatcher:
    """Invokes the handler bound to a query shape's runtime type.

    The dispatcher knows nothing about individual shapes: adding a shape
    and its handler only requires registering them.
    """

    def __init__(self, handlers: HandlerRegistry):
        self.handlers = handlers

    async def dispatch(
        self,
        query: SearchQuery,
        collection: CollectionDescriptor,
        order_by: str | None,
        skip: int,
        take: int | None,
        session: StorageSession,
    ) -> QueryResult:
        """Dispatch a query shape to its handler.

        Args:
            query: The decoded query shape.
            collection: The resolved target collection.
            order_by: The caller's orderBy string.
            skip: Records to skip.
            take: Page size, or None for every remaining record.
            session: The caller's storage session for this request.

        Returns:
            The handler's result.

        Raises:
            InvalidPagination: If skip or take is negative.
            NoHandlerRegistered: If the shape has no handler.
        """
        if skip < 0:
            raise InvalidPagination(f"skip must not be negative, got {skip}")
        if take is not None and take < 0:
            raise InvalidPagination(f"take must not be negative, got {take}")

        query_type = type(query)
        try:
            handler = self.handlers.get(query_type)
        except NoHandlerRegistered:
            LOGGER.error(
                "No handler registered for query type",
                extra={"query_type": query.discriminator(), "query_class": query_type.__name__},
            )
            raise

        LOGGER.debug(
            "Dispatching query",
            extra={"query_type": query.discriminator(), "handler": type(handler).__name__},
        )
        return await handler.handle(query, collection, order_by, skip, take, session)
