"""Tests for CollectionDescriptor."""

import pytest
from pydantic import BaseModel, ValidationError

from readmodel.domain import CollectionDescriptor
from readmodel.features.supercoach import SUPERCOACH_PLAYERS, SuperCoachPlayer


class Book(BaseModel):
    isbn: str
    title: str | None = None


def test_data_type_names_include_aliases():
    assert SUPERCOACH_PLAYERS.data_type_names == (
        "SuperCoachPlayer",
        "SuperCoachPlayerDataContract",
    )


def test_sort_lookup_maps_names_and_aliases():
    lookup = SUPERCOACH_PLAYERS.sort_lookup

    assert lookup["lastname"] == "last_name"
    assert lookup["last_name"] == "last_name"
    assert lookup["playerid"] == "player_id"
    assert "breakeven" not in lookup


def test_identity_field_is_always_sortable():
    books = CollectionDescriptor(
        name="Book", collection_name="books", record_type=Book, identity_field="isbn"
    )

    assert books.sort_lookup == {"isbn": "isbn"}


def test_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        CollectionDescriptor(
            name="Book",
            collection_name="books",
            record_type=Book,
            identity_field="isbn",
            sortable_fields=("author",),
        )


def test_to_record_validates_documents():
    record = SUPERCOACH_PLAYERS.to_record({"player_id": 1, "last_name": "Gawn"})

    assert isinstance(record, SuperCoachPlayer)
    assert record.last_name == "Gawn"
