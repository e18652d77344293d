"""Domain primitives for read model queries.

- SearchQuery: Base class for query shapes
- CollectionDescriptor: Describes a queryable collection
- OrderSpec: Validated sort keys
- QueryResult: A page of records plus the total match count
- Exceptions for request and configuration errors
"""

from .collection import CollectionDescriptor
from .exceptions import (
    ConfigurationError,
    DuplicateDataType,
    DuplicateDiscriminator,
    DuplicateHandler,
    HandlerCollectionMissing,
    InvalidFieldValue,
    InvalidOrderBy,
    InvalidPagination,
    MissingDiscriminator,
    MissingRequiredField,
    NoHandlerRegistered,
    QueryRequestError,
    ReadModelError,
    UnknownDataType,
    UnknownQueryType,
    UnsupportedCollection,
)
from .ordering import OrderKey, OrderSpec
from .query import SearchQuery
from .result import QueryResult

__all__ = [
    "CollectionDescriptor",
    "OrderKey",
    "OrderSpec",
    "QueryResult",
    "SearchQuery",
    # Errors
    "ConfigurationError",
    "DuplicateDataType",
    "DuplicateDiscriminator",
    "DuplicateHandler",
    "HandlerCollectionMissing",
    "InvalidFieldValue",
    "InvalidOrderBy",
    "InvalidPagination",
    "MissingDiscriminator",
    "MissingRequiredField",
    "NoHandlerRegistered",
    "QueryRequestError",
    "ReadModelError",
    "UnknownDataType",
    "UnknownQueryType",
    "UnsupportedCollection",
]
