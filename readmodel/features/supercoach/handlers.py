from ...application import QueryHandler
from ...routing import handles_query
from ...storage import AtLeast, AtMost, ContainsText, Equals, FilterableSequence
from .collections import SUPERCOACH_PLAYERS
from .queries import (
    PlayersByPosition,
    PlayersByRoundPerformance,
    PlayersByTeam,
    PlayerTextSearch,
)


class PlayersByTeamHandler(QueryHandler):
    collection = SUPERCOACH_PLAYERS

    @handles_query
    def filter(self, query: PlayersByTeam, records: FilterableSequence) -> FilterableSequence:
        records = records.where(Equals(field="team_id", value=query.team_id))
        if query.season is not None:
            records = records.where(Equals(field="season", value=query.season))
        return records


class PlayersByPositionHandler(QueryHandler):
    collection = SUPERCOACH_PLAYERS

    @handles_query
    def filter(
        self, query: PlayersByPosition, records: FilterableSequence
    ) -> FilterableSequence:
        records = records.where(Equals(field="position", value=query.position))
        if query.min_price is not None:
            records = records.where(AtLeast(field="current_price", value=query.min_price))
        if query.max_price is not None:
            records = records.where(AtMost(field="current_price", value=query.max_price))
        return records


class PlayersByRoundPerformanceHandler(QueryHandler):
    collection = SUPERCOACH_PLAYERS

    @handles_query
    def filter(
        self, query: PlayersByRoundPerformance, records: FilterableSequence
    ) -> FilterableSequence:
        records = records.where(Equals(field="round", value=query.round))
        if query.min_points is not None:
            records = records.where(AtLeast(field="last_round_score", value=query.min_points))
        if query.max_points is not None:
            records = records.where(AtMost(field="last_round_score", value=query.max_points))
        return records


class PlayerTextSearchHandler(QueryHandler):
    collection = SUPERCOACH_PLAYERS

    @handles_query
    def filter(self, query: PlayerTextSearch, records: FilterableSequence) -> FilterableSequence:
        return records.where(
            ContainsText(
                fields=("first_name", "last_name", "full_name"),
                term=query.search_term,
            )
        )
