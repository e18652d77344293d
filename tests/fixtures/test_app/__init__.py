"""Test application package: a small library catalogue."""

from .collections import BOOKS
from .handlers.books import BooksByAuthorHandler
from .handlers.nested.published import BooksPublishedAfterHandler
from .models import Book
from .queries import BooksByAuthor, BooksByGenre, BooksPublishedAfter

__all__ = [
    "BOOKS",
    "Book",
    "BooksByAuthor",
    "BooksByAuthorHandler",
    "BooksByGenre",
    "BooksPublishedAfter",
    "BooksPublishedAfterHandler",
]
