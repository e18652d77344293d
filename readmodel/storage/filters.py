"""Filter predicates handlers compose into a query.

Each predicate is a single hand-written condition on one or more record
fields. A predicate can be evaluated against an in-memory document and
translated into a MongoDB filter document, so the same handler code runs
against every storage session.

Example:
    >>> records = session.query(PLAYERS)
    >>> records = records.where(Equals(field="team_id", value=7))
    >>> records = records.where(AtLeast(field="current_price", value=300_000))
"""

import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict


class Predicate(BaseModel, ABC):
    """Base class for filter predicates."""

    model_config = ConfigDict(frozen=True)

    @abstractmethod
    def matches(self, document: Mapping[str, Any]) -> bool:
        """Return True if the document satisfies this predicate."""
        ...

    @abstractmethod
    def to_mongo(self) -> dict[str, Any]:
        """Translate this predicate into a MongoDB filter document."""
        ...


class Equals(Predicate):
    """Field equals value."""

    field: str
    value: Any

    def matches(self, document: Mapping[str, Any]) -> bool:
        return bool(document.get(self.field) == self.value)

    def to_mongo(self) -> dict[str, Any]:
        return {self.field: self.value}


class AtLeast(Predicate):
    """Field is present and greater than or equal to value."""

    field: str
    value: Any

    def matches(self, document: Mapping[str, Any]) -> bool:
        actual = document.get(self.field)
        return actual is not None and actual >= self.value

    def to_mongo(self) -> dict[str, Any]:
        return {self.field: {"$gte": self.value}}


class AtMost(Predicate):
    """Field is present and less than or equal to value."""

    field: str
    value: Any

    def matches(self, document: Mapping[str, Any]) -> bool:
        actual = document.get(self.field)
        return actual is not None and actual <= self.value

    def to_mongo(self) -> dict[str, Any]:
        return {self.field: {"$lte": self.value}}


class ContainsText(Predicate):
    """Any of the fields contains the term, ignoring case.

    Null or missing fields never match.
    """

    fields: tuple[str, ...]
    term: str

    def matches(self, document: Mapping[str, Any]) -> bool:
        needle = self.term.lower()
        for field in self.fields:
            value = document.get(field)
            if isinstance(value, str) and needle in value.lower():
                return True
        return False

    def to_mongo(self) -> dict[str, Any]:
        pattern = re.escape(self.term)
        return {
            "$or": [
                {field: {"$regex": pattern, "$options": "i"}} for field in self.fields
            ]
        }


def to_mongo_filter(predicates: tuple[Predicate, ...]) -> dict[str, Any]:
    """Combine predicates into a single MongoDB filter as a conjunction."""
    if not predicates:
        return {}
    if len(predicates) == 1:
        return predicates[0].to_mongo()
    return {"$and": [predicate.to_mongo() for predicate in predicates]}
