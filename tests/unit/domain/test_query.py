"""Tests for the SearchQuery base class."""

from typing import ClassVar

import pytest
from pydantic import ValidationError

from readmodel.domain import SearchQuery
from readmodel.features.supercoach import PlayersByTeam, PlayerTextSearch


class Undeclared(SearchQuery):
    name: str


class Child(PlayersByTeam):
    pass


class TestDiscriminator:
    def test_uses_declared_query_type(self):
        assert PlayersByTeam.discriminator() == "PlayersByTeam"
        assert PlayerTextSearch.discriminator() == "PlayerTextSearch"

    def test_falls_back_to_class_name(self):
        assert Undeclared.discriminator() == "Undeclared"

    def test_subclass_does_not_inherit_discriminator(self):
        assert Child.discriminator() == "Child"

    def test_available_on_instances(self):
        assert PlayersByTeam(team_id=7).discriminator() == "PlayersByTeam"


class TestShapeModel:
    def test_accepts_camel_case_aliases(self):
        query = PlayersByTeam.model_validate({"teamId": 7, "season": 2025})

        assert query.team_id == 7
        assert query.season == 2025

    def test_accepts_attribute_names(self):
        query = PlayersByTeam.model_validate({"team_id": 7})

        assert query.team_id == 7
        assert query.season is None

    def test_is_frozen(self):
        query = PlayersByTeam(team_id=7)

        with pytest.raises(ValidationError):
            query.team_id = 8  # type: ignore[misc]

    def test_equal_when_fields_equal(self):
        assert PlayersByTeam(team_id=7, season=2025) == PlayersByTeam(team_id=7, season=2025)
        assert PlayersByTeam(team_id=7) != PlayersByTeam(team_id=8)

    def test_ignores_unknown_fields(self):
        query = PlayersByTeam.model_validate({"teamId": 7, "colour": "red"})

        assert not hasattr(query, "colour")

    def test_query_type_is_not_a_field(self):
        class Custom(SearchQuery):
            query_type: ClassVar[str] = "Custom"
            value: int

        assert "query_type" not in Custom.model_fields
