from typing import ClassVar

from readmodel.domain import SearchQuery


class BooksByAuthor(SearchQuery):
    query_type: ClassVar[str] = "BooksByAuthor"

    author: str


class BooksPublishedAfter(SearchQuery):
    query_type: ClassVar[str] = "BooksPublishedAfter"

    year: int


class BooksByGenre(SearchQuery):
    """Deliberately left without a handler."""

    query_type: ClassVar[str] = "BooksByGenre"

    genre: str
