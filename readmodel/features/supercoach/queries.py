"""Well-known queries over SuperCoach players."""

from typing import ClassVar

from ...domain import SearchQuery


class PlayersByTeam(SearchQuery):
    """Players in a team, optionally limited to one season."""

    query_type: ClassVar[str] = "PlayersByTeam"

    team_id: int
    season: int | None = None


class PlayersByPosition(SearchQuery):
    """Players in a position, optionally within a price range."""

    query_type: ClassVar[str] = "PlayersByPosition"

    position: str
    min_price: int | None = None
    max_price: int | None = None


class PlayersByRoundPerformance(SearchQuery):
    """Players' scores in a round, optionally within a points range."""

    query_type: ClassVar[str] = "PlayersByRoundPerformance"

    round: int
    min_points: int | None = None
    max_points: int | None = None


class PlayerTextSearch(SearchQuery):
    """Players whose first, last or full name contains a search term."""

    query_type: ClassVar[str] = "PlayerTextSearch"

    search_term: str
