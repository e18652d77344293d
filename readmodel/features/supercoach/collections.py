from ...domain import CollectionDescriptor
from .models import SuperCoachPlayer

SUPERCOACH_PLAYERS = CollectionDescriptor(
    name="SuperCoachPlayer",
    aliases=("SuperCoachPlayerDataContract",),
    collection_name="supercoach_players",
    record_type=SuperCoachPlayer,
    identity_field="player_id",
    sortable_fields=(
        "player_id",
        "first_name",
        "last_name",
        "full_name",
        "position",
        "current_price",
        "team_id",
        "team_short_name",
        "total_points",
        "average_points",
        "last_round_score",
        "season",
        "round",
    ),
)
