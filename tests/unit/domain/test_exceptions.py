"""Tests for the error taxonomy."""

import pytest

from readmodel.domain import (
    ConfigurationError,
    DuplicateDiscriminator,
    InvalidFieldValue,
    MissingDiscriminator,
    MissingRequiredField,
    NoHandlerRegistered,
    QueryRequestError,
    UnknownDataType,
    UnknownQueryType,
    UnsupportedCollection,
)
from readmodel.features.supercoach import PlayersByTeam, PlayerTextSearch


@pytest.mark.parametrize(
    "error",
    [
        MissingDiscriminator("queryType"),
        UnknownQueryType("Nope", ["PlayersByTeam"]),
        MissingRequiredField("PlayersByTeam", ["teamId"]),
        InvalidFieldValue("PlayersByTeam", {"teamId": "bad"}),
        UnknownDataType("Nope", ["SuperCoachPlayer"]),
        UnsupportedCollection("Handler", "A", "B"),
    ],
)
def test_request_errors_are_client_errors(error):
    assert isinstance(error, QueryRequestError)
    assert error.status_code == 400


def test_no_handler_is_a_configuration_error_visible_to_clients():
    error = NoHandlerRegistered(PlayersByTeam)

    assert isinstance(error, ConfigurationError)
    assert not isinstance(error, QueryRequestError)
    assert error.status_code == 400
    assert "PlayersByTeam" in str(error)


def test_duplicate_discriminator_names_both_shapes():
    error = DuplicateDiscriminator("PlayersByTeam", PlayersByTeam, PlayerTextSearch)

    assert error.status_code == 500
    assert "PlayersByTeam" in str(error)
    assert "PlayerTextSearch" in str(error)


def test_unknown_names_list_available_options():
    error = UnknownDataType("Thing", ["SuperCoachPlayer", "Book"])

    assert str(error) == "Unknown data type: Thing. Available types: Book, SuperCoachPlayer"
