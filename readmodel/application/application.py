import logging
from collections.abc import Mapping
from typing import Any

from ..context import request_context
from ..domain import (
    CollectionDescriptor,
    InvalidPagination,
    NoHandlerRegistered,
    QueryRequestError,
    QueryResult,
    SearchQuery,
)
from ..settings import ReadModelSettings
from ..storage import StorageSession
from .contracts import ReadModelRequest, ReadModelResponse
from .decoding import PolymorphicQueryDecoder, QueryParams
from .discovery import ClassScanner, ModuleScanner
from .handlers import HandlerRegistry, QueryDispatcher, QueryHandler
from .ordering import OrderingCompiler
from .registry import DocumentTypeResolver, QueryTypeRegistry

LOGGER = logging.getLogger(__name__)


class Application:
    """The assembled read model query service.

    An Application owns every registry and component needed to serve
    requests. It is built once at startup by ``ApplicationBuilder`` and is
    read-only afterwards, so a single instance can serve any number of
    concurrent requests. Each request brings its own storage session.
    """

    def __init__(
        self,
        settings: ReadModelSettings,
        query_types: QueryTypeRegistry,
        document_types: DocumentTypeResolver,
        handlers: HandlerRegistry,
    ):
        self.settings = settings
        self.query_types = query_types
        self.document_types = document_types
        self.handlers = handlers
        self.decoder = PolymorphicQueryDecoder(query_types, settings.discriminator_field)
        self.dispatcher = QueryDispatcher(handlers)

    def decode(self, payload: Mapping[str, Any] | str | bytes) -> SearchQuery:
        """Decode a JSON query object into its query shape.

        See ``PolymorphicQueryDecoder.decode``.
        """
        return self.decoder.decode(payload)

    def decode_query_string(self, params: QueryParams) -> SearchQuery:
        """Decode flattened query string parameters into a query shape.

        See ``PolymorphicQueryDecoder.decode_query_string``.
        """
        return self.decoder.decode_query_string(params)

    def resolve(self, data_type: str) -> CollectionDescriptor:
        """Resolve a data type name to its collection.

        Raises:
            UnknownDataType: If no collection answers to this name.
        """
        return self.document_types.resolve(data_type)

    async def dispatch(
        self,
        query: SearchQuery,
        collection: CollectionDescriptor,
        session: StorageSession,
        order_by: str | None = None,
        skip: int = 0,
        take: int | None = None,
    ) -> QueryResult:
        """Execute a decoded query shape against a collection.

        Raises:
            InvalidPagination: If skip or take are out of range.
            NoHandlerRegistered: If the shape has no handler.
            UnsupportedCollection: If the handler does not serve the collection.
        """
        self._check_pagination(skip, take)
        return await self.dispatcher.dispatch(query, collection, order_by, skip, take, session)

    async def execute(
        self,
        request: ReadModelRequest | Mapping[str, Any] | str | bytes,
        session: StorageSession,
    ) -> ReadModelResponse:
        """Serve a read model request end to end.

        Decodes the query, resolves the data type, dispatches to the
        handler and wraps the result. Errors are logged and re-raised
        unchanged for the transport layer to translate.

        Args:
            request: The request envelope, parsed or as a JSON body.
            session: Storage session owned by the caller for this request.

        Returns:
            The response envelope.
        """
        if not isinstance(request, ReadModelRequest):
            request = ReadModelRequest.parse(request)

        with request_context(request.id) as ctx:
            extra = {**ctx.log_extra(), "data_type": request.data_type}
            try:
                if request.from_query_string:
                    query = self.decoder.decode_query_string(request.query)
                else:
                    query = self.decoder.decode(request.query)
                extra["query_type"] = query.discriminator()
                LOGGER.info("Processing read model query", extra=extra)

                collection = self.resolve(request.data_type)
                LOGGER.debug(
                    "Resolved collection",
                    extra={**extra, "collection": collection.collection_name},
                )

                result = await self.dispatch(
                    query,
                    collection,
                    session,
                    order_by=request.order_by,
                    skip=request.skip,
                    take=request.take,
                )
            except NoHandlerRegistered:
                # Already logged at error level by the dispatcher
                raise
            except QueryRequestError as e:
                LOGGER.warning("Invalid read model query: %s", e, extra=extra)
                raise
            except Exception:
                LOGGER.exception("Error processing read model query", extra=extra)
                raise

            LOGGER.info(
                "Query executed successfully",
                extra={
                    **extra,
                    "returned": len(result.items),
                    "total_count": result.total_count,
                },
            )
            return ReadModelResponse.from_result(result, request.data_type)

    async def execute_query_string(
        self, params: QueryParams, session: StorageSession
    ) -> ReadModelResponse:
        """Serve a request whose envelope and query arrive as a query string."""
        return await self.execute(ReadModelRequest.from_query_params(params), session)

    def _check_pagination(self, skip: int, take: int | None) -> None:
        # Negative bounds are rejected by the dispatcher
        max_take = self.settings.max_take
        if max_take is not None and (take is None or take > max_take):
            raise InvalidPagination(f"take must be between 0 and {max_take}, got {take}")


class ApplicationBuilder:
    """Builder for creating Application instances.

    Query shapes, handlers and collections are collected first and every
    registry is built in one go by ``build()``. Any conflicting
    registration fails there, before the first request is served.

    Example:
        >>> app = (
        ...     ApplicationBuilder()
        ...     .convention_based("readmodel.features.supercoach")
        ...     .build()
        ... )
        >>> response = await app.execute(
        ...     {
        ...         "dataType": "SuperCoachPlayer",
        ...         "query": {"queryType": "PlayersByTeam", "teamId": 7},
        ...         "take": 20,
        ...     },
        ...     session,
        ... )
    """

    def __init__(self) -> None:
        self.settings: ReadModelSettings | None = None
        self.query_types: list[type[SearchQuery]] = []
        self.handler_types: list[type[QueryHandler]] = []
        self.collections: list[CollectionDescriptor] = []

    def with_settings(self, settings: ReadModelSettings) -> "ApplicationBuilder":
        """Use explicit settings instead of reading them from the environment."""
        self.settings = settings
        return self

    def register_query(self, query_type: type[SearchQuery]) -> "ApplicationBuilder":
        """Register a query shape.

        Registering the same class twice is harmless.
        """
        if query_type not in self.query_types:
            self.query_types.append(query_type)
        return self

    def register_handler(self, handler_type: type[QueryHandler]) -> "ApplicationBuilder":
        """Register a query handler class.

        The shapes it handles are registered along with it.
        """
        if handler_type not in self.handler_types:
            self.handler_types.append(handler_type)
        for query_type in handler_type.query_types():
            self.register_query(query_type)
        return self

    def register_collection(self, collection: CollectionDescriptor) -> "ApplicationBuilder":
        """Register a queryable collection."""
        if not any(c is collection for c in self.collections):
            self.collections.append(collection)
        return self

    def convention_based(self, package_name: str) -> "ApplicationBuilder":
        """Register shapes, handlers and collections found in a feature package.

        Args:
            package_name: The package to scan (e.g. "myapp.features.players").

        Returns:
            The application builder.
        """
        scanner = ModuleScanner(package_name)
        for module in scanner.find_modules("collection"):
            for collection in ClassScanner.find_instances(module, CollectionDescriptor):
                self.register_collection(collection)
        for module in scanner.find_modules("query"):
            for query_type in ClassScanner.find_subclasses(module, SearchQuery):
                self.register_query(query_type)
        for module in scanner.find_modules("handler"):
            for handler_type in ClassScanner.find_subclasses(module, QueryHandler):
                if handler_type.query_types():
                    self.register_handler(handler_type)
        return self

    def build(self) -> Application:
        """Build the application.

        Returns:
            The configured Application instance.

        Raises:
            DuplicateDiscriminator: If two shapes share a discriminator.
            DuplicateDataType: If two collections share a data type name.
            DuplicateHandler: If two handlers claim the same shape.
            HandlerCollectionMissing: If a handler does not name its collection.
        """
        settings = self.settings or ReadModelSettings()
        ordering = OrderingCompiler(settings.ordering_policy)

        query_types = QueryTypeRegistry.from_query_types(self.query_types)
        document_types = DocumentTypeResolver.from_collections(self.collections)
        handlers = HandlerRegistry.from_handlers(
            handler_type(ordering) for handler_type in self.handler_types
        )

        for query_type in query_types.query_types():
            if query_type not in handlers:
                LOGGER.warning(
                    "Query type has no handler",
                    extra={"query_type": query_type.discriminator()},
                )

        return Application(settings, query_types, document_types, handlers)
