"""Tests for compiling orderBy strings."""

import logging

import pytest

from readmodel.application import OrderingCompiler, compile_order_by
from readmodel.domain import InvalidOrderBy, OrderKey, OrderSpec
from readmodel.features.supercoach import SUPERCOACH_PLAYERS

SORTABLE = {"Name", "Age", "Team"}
DEFAULT = OrderKey("Id")


def keys(spec: OrderSpec) -> list[tuple[str, bool]]:
    return [(key.field, key.descending) for key in spec]


class TestCompileOrderBy:
    @pytest.mark.parametrize("order_by", [None, "", "   ", ",", " , ,"])
    def test_blank_yields_default(self, order_by):
        spec = compile_order_by(order_by, SORTABLE, DEFAULT)

        assert keys(spec) == [("Id", False)]

    def test_single_field_defaults_to_ascending(self):
        assert keys(compile_order_by("Name", SORTABLE, DEFAULT)) == [("Name", False)]

    def test_multiple_fields(self):
        spec = compile_order_by("Name DESC, Age ASC, Team", SORTABLE, DEFAULT)

        assert keys(spec) == [("Name", True), ("Age", False), ("Team", False)]

    def test_fields_and_directions_ignore_case(self):
        spec = compile_order_by("name desc, AGE Asc", SORTABLE, DEFAULT)

        assert keys(spec) == [("Name", True), ("Age", False)]

    def test_unrecognised_direction_is_ascending(self):
        spec = compile_order_by("Name DOWNWARDS", SORTABLE, DEFAULT)

        assert keys(spec) == [("Name", False)]

    def test_extra_whitespace_is_tolerated(self):
        spec = compile_order_by("  Name\tDESC ,   Age   ", SORTABLE, DEFAULT)

        assert keys(spec) == [("Name", True), ("Age", False)]

    def test_empty_clauses_are_skipped(self):
        spec = compile_order_by("Name,,Age DESC,", SORTABLE, DEFAULT)

        assert keys(spec) == [("Name", False), ("Age", True)]

    def test_unknown_later_field_is_dropped(self):
        spec = compile_order_by("Name DESC, Unknown ASC, Age", SORTABLE, DEFAULT)

        assert keys(spec) == [("Name", True), ("Age", False)]
        assert str(spec) == "Name DESC, Age ASC"

    def test_unknown_first_field_uses_default_then_continues(self):
        spec = compile_order_by("Unknown DESC, Name DESC", SORTABLE, DEFAULT)

        assert keys(spec) == [("Id", False), ("Name", True)]

    def test_unknown_first_field_then_default_field_keeps_default_direction(self):
        spec = compile_order_by("Unknown, Id DESC", SORTABLE | {"Id"}, DEFAULT)

        assert keys(spec) == [("Id", False)]

    def test_repeated_field_keeps_first_direction(self):
        spec = compile_order_by("Name, name DESC, Age", SORTABLE, DEFAULT)

        assert keys(spec) == [("Name", False), ("Age", False)]

    def test_repeated_field_alone_keeps_first_direction(self):
        spec = compile_order_by("Name, name DESC", SORTABLE, DEFAULT)

        assert keys(spec) == [("Name", False)]

    def test_only_unknown_field_yields_default(self):
        spec = compile_order_by("Shoe DESC", SORTABLE, DEFAULT)

        assert keys(spec) == [("Id", False)]

    def test_unknown_fields_logged_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="readmodel.application.ordering"):
            compile_order_by("Shoe", SORTABLE, DEFAULT)

        assert any(r.levelno == logging.DEBUG and r.fields == ["Shoe"] for r in caplog.records)

    def test_mapping_whitelist_resolves_canonical_names(self):
        spec = compile_order_by("lastName DESC", {"lastname": "last_name"}, DEFAULT)

        assert keys(spec) == [("last_name", True)]


class TestStrictPolicy:
    def test_unknown_field_raises(self):
        with pytest.raises(InvalidOrderBy) as exc_info:
            compile_order_by("Name, Shoe DESC", SORTABLE, DEFAULT, policy="strict")

        assert exc_info.value.fields == ["Shoe"]
        assert exc_info.value.status_code == 400
        assert "Age, Name, Team" in str(exc_info.value)

    def test_repeated_field_raises(self):
        with pytest.raises(InvalidOrderBy) as exc_info:
            compile_order_by("Name, name DESC", SORTABLE, DEFAULT, policy="strict")

        assert exc_info.value.fields == ["name"]

    def test_known_fields_compile(self):
        spec = compile_order_by("Team DESC", SORTABLE, DEFAULT, policy="strict")

        assert keys(spec) == [("Team", True)]

    def test_blank_still_yields_default(self):
        assert keys(compile_order_by("", SORTABLE, DEFAULT, policy="strict")) == [("Id", False)]


class TestOrderingCompiler:
    def test_default_is_identity_ascending(self):
        spec = OrderingCompiler.default_for(SUPERCOACH_PLAYERS)

        assert keys(spec) == [("player_id", False)]

    def test_compiles_against_collection_fields(self):
        spec = OrderingCompiler().compile("lastName desc, firstName", SUPERCOACH_PLAYERS)

        assert keys(spec) == [("last_name", True), ("first_name", False)]

    def test_accepts_attribute_names(self):
        spec = OrderingCompiler().compile("current_price DESC", SUPERCOACH_PLAYERS)

        assert keys(spec) == [("current_price", True)]

    def test_non_sortable_field_falls_back(self):
        spec = OrderingCompiler().compile("breakEven DESC", SUPERCOACH_PLAYERS)

        assert keys(spec) == [("player_id", False)]

    def test_identity_repeated_after_unknown_first_field(self):
        spec = OrderingCompiler().compile("bogus, playerId DESC", SUPERCOACH_PLAYERS)

        assert keys(spec) == [("player_id", False)]
        assert spec.to_mongo() == [("player_id", 1)]

    def test_strict_compiler(self):
        with pytest.raises(InvalidOrderBy):
            OrderingCompiler("strict").compile("breakEven", SUPERCOACH_PLAYERS)
