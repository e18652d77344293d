"""Storage collaborators for read model queries.

This package provides:
- StorageSession / FilterableSequence: Interfaces handlers run against
- Predicate and its implementations: Hand-written filter conditions
- InMemoryStorageSession: A document store held in memory
"""

from .filters import AtLeast, AtMost, ContainsText, Equals, Predicate, to_mongo_filter
from .memory import InMemorySequence, InMemoryStorageSession
from .session import FilterableSequence, StorageSession

__all__ = [
    "AtLeast",
    "AtMost",
    "ContainsText",
    "Equals",
    "FilterableSequence",
    "InMemorySequence",
    "InMemoryStorageSession",
    "Predicate",
    "StorageSession",
    "to_mongo_filter",
]
