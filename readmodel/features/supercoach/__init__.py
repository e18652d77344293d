"""SuperCoach player read models.

Register the whole feature with:

    >>> ApplicationBuilder().convention_based("readmodel.features.supercoach")
"""

from .collections import SUPERCOACH_PLAYERS
from .handlers import (
    PlayersByPositionHandler,
    PlayersByRoundPerformanceHandler,
    PlayersByTeamHandler,
    PlayerTextSearchHandler,
)
from .models import SuperCoachPlayer
from .queries import (
    PlayersByPosition,
    PlayersByRoundPerformance,
    PlayersByTeam,
    PlayerTextSearch,
)

__all__ = [
    "SUPERCOACH_PLAYERS",
    "SuperCoachPlayer",
    # Queries
    "PlayersByPosition",
    "PlayersByRoundPerformance",
    "PlayersByTeam",
    "PlayerTextSearch",
    # Handlers
    "PlayersByPositionHandler",
    "PlayersByRoundPerformanceHandler",
    "PlayersByTeamHandler",
    "PlayerTextSearchHandler",
]
