"""Unit tests for MongoConfiguration."""

import pytest

from readmodel.integrations.mongodb import MongoConfiguration


def test_config_with_defaults(monkeypatch):
    """Test config creation with default values."""
    monkeypatch.delenv("READMODEL_MONGO_URI", raising=False)
    monkeypatch.delenv("READMODEL_MONGO_DATABASE", raising=False)

    config = MongoConfiguration()

    assert config.uri == "mongodb://localhost:27017"
    assert config.database == "readmodel"


def test_config_reads_environment(monkeypatch):
    monkeypatch.setenv("READMODEL_MONGO_URI", "mongodb://mongo:27017")
    monkeypatch.setenv("READMODEL_MONGO_DATABASE", "fantasy")

    config = MongoConfiguration()

    assert config.uri == "mongodb://mongo:27017"
    assert config.database == "fantasy"


@pytest.mark.asyncio
async def test_collection_uses_configured_database():
    config = MongoConfiguration(database="fantasy")

    collection = config.collection("supercoach_players")

    assert collection.name == "supercoach_players"
    assert collection.database.name == "fantasy"
    assert config.client is config.client
    await config.on_shutdown()


@pytest.mark.asyncio
async def test_shutdown_without_client_is_a_no_op():
    config = MongoConfiguration()

    await config.on_startup()
    await config.on_shutdown()

    assert "client" not in config.__dict__
