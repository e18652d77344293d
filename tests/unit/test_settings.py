"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from readmodel.settings import ReadModelSettings


def test_defaults(monkeypatch):
    for name in ("DISCRIMINATOR_FIELD", "ORDERING_POLICY", "MAX_TAKE"):
        monkeypatch.delenv(f"READMODEL_{name}", raising=False)

    settings = ReadModelSettings()

    assert settings.discriminator_field == "queryType"
    assert settings.ordering_policy == "lenient"
    assert settings.max_take is None


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("READMODEL_DISCRIMINATOR_FIELD", "$type")
    monkeypatch.setenv("READMODEL_ORDERING_POLICY", "strict")
    monkeypatch.setenv("READMODEL_MAX_TAKE", "500")

    settings = ReadModelSettings()

    assert settings.discriminator_field == "$type"
    assert settings.ordering_policy == "strict"
    assert settings.max_take == 500


@pytest.mark.parametrize("values", [{"ordering_policy": "loose"}, {"max_take": 0}])
def test_rejects_invalid_values(values):
    with pytest.raises(ValidationError):
        ReadModelSettings(**values)
