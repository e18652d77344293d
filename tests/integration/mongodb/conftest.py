"""Pytest fixtures for MongoDB integration tests."""

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from pymongo.errors import PyMongoError

from readmodel.features.supercoach import SUPERCOACH_PLAYERS
from readmodel.integrations.mongodb import MongoConfiguration, MongoStorageSession

# Assumes a MongoDB container is running locally on port 27017
LOCAL_MONGO_URI = "mongodb://localhost:27017/?serverSelectionTimeoutMS=2000"


@pytest_asyncio.fixture
async def mongo_config(request: pytest.FixtureRequest) -> AsyncIterator[MongoConfiguration]:
    """Create a MongoConfiguration pointing to a fresh local database."""
    config = MongoConfiguration(uri=LOCAL_MONGO_URI, database=f"test_{request.node.name}"[:63])
    try:
        await config.client.drop_database(config.database)
    except PyMongoError as e:
        await config.on_shutdown()
        pytest.skip(f"MongoDB is not reachable: {e}")
    try:
        yield config
    finally:
        await config.client.drop_database(config.database)
        await config.on_shutdown()


@pytest_asyncio.fixture
async def mongo_session(mongo_config: MongoConfiguration, players) -> MongoStorageSession:
    """A MongoDB storage session seeded with the squad."""
    session = MongoStorageSession(mongo_config)
    await session.insert(SUPERCOACH_PLAYERS, *players)
    return session
