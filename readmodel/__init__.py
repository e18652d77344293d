"""Readmodel - Polymorphic read model queries for Python.

This module provides the public API for serving named, paginated queries
over document collections.
"""

from .application import Application, ApplicationBuilder, QueryHandler
from .domain import CollectionDescriptor, QueryResult, SearchQuery
from .routing import handles_query
from .settings import ReadModelSettings

__all__ = [
    # Application
    "Application",
    "ApplicationBuilder",
    "ReadModelSettings",
    # Domain primitives
    "CollectionDescriptor",
    "QueryHandler",
    "QueryResult",
    "SearchQuery",
    # Decorators
    "handles_query",
]
