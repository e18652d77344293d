"""Central test fixtures built around the SuperCoach feature."""

import pytest

from readmodel.application import Application, ApplicationBuilder
from readmodel.features.supercoach import SUPERCOACH_PLAYERS, SuperCoachPlayer
from readmodel.settings import ReadModelSettings
from readmodel.storage import InMemoryStorageSession


def make_player(player_id: int, **fields) -> SuperCoachPlayer:
    """Create a player with only the fields a test cares about."""
    return SuperCoachPlayer(player_id=player_id, **fields)


@pytest.fixture
def players() -> list[SuperCoachPlayer]:
    """A small squad, deliberately stored out of identity order."""
    return [
        make_player(
            3, first_name="Christian", last_name="Petracca", full_name="Christian Petracca",
            position="MID", current_price=590_000, team_id=7, season=2024, round=3,
            last_round_score=130, total_points=1210,
        ),
        make_player(
            1, first_name="Max", last_name="Gawn", full_name="Max Gawn",
            position="RUC", current_price=650_000, team_id=7, season=2025, round=3,
            last_round_score=120, total_points=900,
        ),
        make_player(
            5, first_name="Nick", last_name="Daicos", full_name="Nick Daicos",
            position="DEF", current_price=600_000, team_id=4, season=2025, round=3,
            last_round_score=140, total_points=1300,
        ),
        make_player(
            2, first_name="Clayton", last_name="Oliver", full_name="Clayton Oliver",
            position="MID", current_price=610_000, team_id=7, season=2025, round=3,
            last_round_score=95, total_points=950,
        ),
        make_player(
            6, first_name="Tim", last_name="English", full_name="Tim English",
            position="RUC", current_price=580_000, team_id=3, season=2025, round=4,
            last_round_score=None, total_points=700,
        ),
        make_player(
            4, first_name="Marcus", last_name="Bontempelli", full_name="Marcus Bontempelli",
            position="MID", current_price=640_000, team_id=3, season=2025, round=3,
            last_round_score=110, total_points=1100,
        ),
    ]


@pytest.fixture
def session(players: list[SuperCoachPlayer]) -> InMemoryStorageSession:
    """An in-memory storage session seeded with the squad."""
    session = InMemoryStorageSession()
    session.add(SUPERCOACH_PLAYERS, *players)
    return session


@pytest.fixture
def settings() -> ReadModelSettings:
    """Default settings, independent of the environment."""
    return ReadModelSettings(discriminator_field="queryType", ordering_policy="lenient")


@pytest.fixture
def app(settings: ReadModelSettings) -> Application:
    """Application wired with the SuperCoach feature via discovery."""
    return (
        ApplicationBuilder()
        .with_settings(settings)
        .convention_based("readmodel.features.supercoach")
        .build()
    )


@pytest.fixture(autouse=True)
def clear_request_context():
    """Automatically clear request context after each test."""
    yield
    from readmodel.context import clear_context

    clear_context()
