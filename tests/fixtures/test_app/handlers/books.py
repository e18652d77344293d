from readmodel.application import QueryHandler
from readmodel.routing import handles_query
from readmodel.storage import FilterableSequence

from ..collections import BOOKS
from ..queries import BooksByAuthor
from ._predicates import written_by


class BooksByAuthorHandler(QueryHandler):
    collection = BOOKS

    @handles_query
    def filter(self, query: BooksByAuthor, records: FilterableSequence) -> FilterableSequence:
        return records.where(written_by(query.author))


class _DraftHandler(QueryHandler):
    collection = BOOKS
