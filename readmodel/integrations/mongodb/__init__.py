"""MongoDB integration for read model queries.

Provides a storage session that runs handler filters, counts, ordering and
paging against MongoDB using the async PyMongo driver.

Usage:
    >>> from readmodel.integrations.mongodb import (
    ...     MongoConfiguration,
    ...     MongoStorageSession,
    ... )
    >>>
    >>> config = MongoConfiguration(uri="mongodb://localhost:27017", database="myapp")
    >>> session = MongoStorageSession(config)
    >>> response = await app.execute(request, session)
"""

from .config import MongoConfiguration
from .session import MongoSequence, MongoStorageSession

__all__ = [
    "MongoConfiguration",
    "MongoSequence",
    "MongoStorageSession",
]
