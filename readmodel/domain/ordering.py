"""Validated sort keys produced from a caller's orderBy string."""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

T = TypeVar("T", bound=Mapping[str, Any])


@dataclass(frozen=True)
class OrderKey:
    """A single sort key: a whitelisted field and its direction."""

    field: str
    descending: bool = False

    def __str__(self) -> str:
        return f"{self.field} {'DESC' if self.descending else 'ASC'}"


@dataclass(frozen=True)
class OrderSpec:
    """An ordered sequence of sort keys.

    Keys apply left to right as primary, secondary, tertiary keys. Sorting
    is stable: records that compare equal on every key keep their relative
    order. Missing and null values order lowest.
    """

    keys: tuple[OrderKey, ...] = ()

    @classmethod
    def of(cls, *keys: OrderKey) -> "OrderSpec":
        return cls(tuple(keys))

    @property
    def fields(self) -> tuple[str, ...]:
        """The fields sorted on, in priority order."""
        return tuple(key.field for key in self.keys)

    def then(self, key: OrderKey) -> "OrderSpec":
        """Return a new spec with ``key`` appended as the lowest priority key."""
        return OrderSpec((*self.keys, key))

    def sort(self, records: Iterable[T]) -> list[T]:
        """Sort mapping records in memory."""
        result = list(records)
        # Stable sorts applied from the least significant key upwards.
        for key in reversed(self.keys):
            result.sort(key=lambda r, f=key.field: _null_lowest(r.get(f)), reverse=key.descending)
        return result

    def to_mongo(self) -> list[tuple[str, int]]:
        """Translate to a PyMongo sort specification.

        A repeated field keeps the direction of its first key, matching
        ``sort``.
        """
        directions: dict[str, int] = {}
        for key in self.keys:
            directions.setdefault(key.field, -1 if key.descending else 1)
        return list(directions.items())

    def __iter__(self):  # type: ignore[no-untyped-def]
        return iter(self.keys)

    def __len__(self) -> int:
        return len(self.keys)

    def __str__(self) -> str:
        return ", ".join(str(key) for key in self.keys)


def _null_lowest(value: Any) -> Sequence[Any]:
    return (False, 0) if value is None else (True, value)
