"""MongoDB configuration using pydantic-settings."""

from functools import cached_property
from typing import Any

from pydantic_settings import BaseSettings
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.asynchronous.mongo_client import AsyncMongoClient


class MongoConfiguration(BaseSettings):
    """Configuration and factory for MongoDB resources.

    All settings can be configured via environment variables with the
    READMODEL_MONGO_ prefix. For example:
    - READMODEL_MONGO_URI=mongodb://localhost:27017
    - READMODEL_MONGO_DATABASE=readmodels

    The client is created lazily on first use and closed on shutdown.

    Example:
        >>> config = MongoConfiguration()
        >>> session = MongoStorageSession(config)
        >>> response = await app.execute(request, session)
        >>> await config.on_shutdown()
    """

    uri: str = "mongodb://localhost:27017"
    database: str = "readmodel"

    model_config = {"env_prefix": "READMODEL_MONGO_"}

    @cached_property
    def client(self) -> AsyncMongoClient[dict[str, Any]]:
        """Get the MongoDB async client."""
        return AsyncMongoClient(self.uri)

    @cached_property
    def db(self) -> AsyncDatabase[dict[str, Any]]:
        """Get the MongoDB async database."""
        return self.client[self.database]

    def collection(self, name: str) -> AsyncCollection[dict[str, Any]]:
        """Get a collection by name."""
        return self.db[name]

    async def on_startup(self) -> None:
        """No-op: connections are established lazily."""
        pass

    async def on_shutdown(self) -> None:
        """Close the MongoDB client if it was created."""
        if "client" in self.__dict__:
            await self.client.close()
