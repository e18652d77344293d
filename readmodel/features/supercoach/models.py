"""SuperCoach player read model."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SuperCoachPlayer(BaseModel):
    """A player's SuperCoach statistics for one season and round."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    player_id: int
    first_name: str | None = None
    last_name: str | None = None
    full_name: str | None = None
    position: str | None = None
    current_price: int | None = None
    team_id: int | None = None
    team_short_name: str | None = None
    jersey_number: int | None = None

    last_round_score: int | None = None
    break_even: float | None = None
    total_points: int | None = None
    average_points: float | None = None
    three_round_average_points: float | None = None
    five_round_average_points: float | None = None
    average_minutes: float | None = None
    three_round_average_minutes: float | None = None
    five_round_average_minutes: float | None = None
    total_minutes_played: int | None = None
    total_games: int | None = None

    is_on_field: bool | None = None
    injury_status: str | None = None
    is_suspended: bool | None = None
    owned_percentage: float | None = None
    captain_percentage: float | None = None

    season: int | None = None
    round: int | None = None
    metadata: dict[str, Any] | None = None
