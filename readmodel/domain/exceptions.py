"""Exceptions raised while resolving and executing read model queries.

Every exception carries a ``status_code`` so that a transport layer can
translate it into a response without maintaining its own lookup table.
Request-time errors derive from ``QueryRequestError``; errors that can only
be caused by how the application was assembled derive from
``ConfigurationError``.
"""

from collections.abc import Iterable


class ReadModelError(Exception):
    """Base class for all read model errors."""

    status_code: int = 500


class QueryRequestError(ReadModelError):
    """Raised when the caller supplied a request that cannot be served."""

    status_code = 400


class ConfigurationError(ReadModelError):
    """Raised when the application was assembled inconsistently."""

    status_code = 500


def _available(names: Iterable[str]) -> str:
    return ", ".join(sorted(names)) or "<none>"


class MissingDiscriminator(QueryRequestError):
    """Raised when the payload has no usable discriminator field."""

    def __init__(self, field_name: str):
        super().__init__(f"Missing '{field_name}' property in query object")
        self.field_name = field_name


class UnknownQueryType(QueryRequestError):
    """Raised when a discriminator does not match any registered shape."""

    def __init__(self, query_type: str, available: Iterable[str]):
        super().__init__(
            f"Unknown query type: {query_type}. Available types: {_available(available)}"
        )
        self.query_type = query_type


class MissingRequiredField(QueryRequestError):
    """Raised when a required shape field is absent from the payload."""

    def __init__(self, query_type: str, fields: list[str]):
        super().__init__(
            f"Query {query_type} is missing required field(s): {', '.join(fields)}"
        )
        self.query_type = query_type
        self.fields = fields


class InvalidFieldValue(QueryRequestError):
    """Raised when a supplied field value cannot be coerced to its type."""

    def __init__(self, query_type: str, errors: dict[str, str]):
        details = "; ".join(f"{name}: {message}" for name, message in errors.items())
        super().__init__(f"Query {query_type} has invalid field value(s): {details}")
        self.query_type = query_type
        self.errors = errors


class UnknownDataType(QueryRequestError):
    """Raised when a data type name does not match any collection."""

    def __init__(self, data_type: str, available: Iterable[str]):
        super().__init__(
            f"Unknown data type: {data_type}. Available types: {_available(available)}"
        )
        self.data_type = data_type


class UnsupportedCollection(QueryRequestError):
    """Raised by a handler asked to run against a collection it does not serve."""

    def __init__(self, handler_name: str, expected: str, actual: str):
        super().__init__(
            f"Handler {handler_name} only supports {expected}, not {actual}"
        )
        self.expected = expected
        self.actual = actual


class InvalidOrderBy(QueryRequestError):
    """Raised under the strict ordering policy for unknown sort fields."""

    def __init__(self, fields: list[str], available: Iterable[str]):
        super().__init__(
            f"Cannot order by {', '.join(fields)}. Sortable fields: {_available(available)}"
        )
        self.fields = fields


class InvalidPagination(QueryRequestError):
    """Raised when skip or take fall outside the accepted range."""


class NoHandlerRegistered(ConfigurationError):
    """Raised when a decoded shape has no handler bound to it.

    This can only happen when a shape was registered without a matching
    handler, but it surfaces to the caller like a rejected request.
    """

    status_code = 400

    def __init__(self, query_type: type):
        super().__init__(f"No handler registered for query type: {query_type.__name__}")
        self.query_type = query_type


class DuplicateDiscriminator(ConfigurationError):
    """Raised at build time when two shapes share a discriminator."""

    def __init__(self, discriminator: str, first: type, second: type):
        super().__init__(
            f"Query type '{discriminator}' is declared by both "
            f"{first.__name__} and {second.__name__}"
        )
        self.discriminator = discriminator


class DuplicateDataType(ConfigurationError):
    """Raised at build time when two collections claim the same data type name."""

    def __init__(self, data_type: str):
        super().__init__(f"Data type '{data_type}' is registered more than once")
        self.data_type = data_type


class DuplicateHandler(ConfigurationError):
    """Raised at build time when two handlers claim the same shape."""

    def __init__(self, query_type: type, first: type, second: type):
        super().__init__(
            f"Query type {query_type.__name__} is handled by both "
            f"{first.__name__} and {second.__name__}"
        )
        self.query_type = query_type


class HandlerCollectionMissing(ConfigurationError):
    """Raised at build time when a handler does not name its collection."""

    def __init__(self, handler_type: type):
        super().__init__(
            f"Handler {handler_type.__name__} must set 'collection' to a CollectionDescriptor"
        )
        self.handler_type = handler_type
