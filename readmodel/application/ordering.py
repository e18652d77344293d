"""Compiles free-text orderBy strings into validated sort specifications.

The accepted format is ``"field [ASC|DESC], field2 [ASC|DESC], ..."``.
Field names are matched without regard to case against a whitelist of
sortable fields; the direction defaults to ascending when it is missing or
not recognised.

Under the lenient policy malformed input never fails a request:

- A blank orderBy yields the collection's default ordering.
- An unknown *first* field is replaced by the default key, and the
  remaining clauses still compose after it.
- An unknown later field is dropped; following clauses still apply.
- A field named again after it already has a key is dropped, so the
  first occurrence decides its direction.

The strict policy instead raises ``InvalidOrderBy`` for any unknown or
repeated field.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Literal

from ..domain import CollectionDescriptor, InvalidOrderBy, OrderKey, OrderSpec

LOGGER = logging.getLogger(__name__)

OrderingPolicy = Literal["lenient", "strict"]


def _parse_clause(clause: str) -> tuple[str, bool]:
    field, _, rest = clause.partition(" ")
    direction = rest.split()[0] if rest.split() else ""
    return field, direction.upper() == "DESC"


def _as_lookup(whitelist: Mapping[str, str] | Iterable[str]) -> Mapping[str, str]:
    if isinstance(whitelist, Mapping):
        return whitelist
    return {name.lower(): name for name in whitelist}


def compile_order_by(
    order_by: str | None,
    whitelist: Mapping[str, str] | Iterable[str],
    default: OrderKey,
    policy: OrderingPolicy = "lenient",
) -> OrderSpec:
    """Compile an orderBy string against a whitelist of sortable fields.

    Args:
        order_by: The caller's orderBy string, possibly None or blank.
        whitelist: Sortable field names, or a mapping from lower-cased
            names to the canonical field name.
        default: Key used when no usable primary key is given.
        policy: "lenient" or "strict".

    Returns:
        The compiled OrderSpec.

    Raises:
        InvalidOrderBy: Under the strict policy, if a field is unknown or
            repeated.

    Example:
        >>> spec = compile_order_by(
        ...     "Name DESC, Unknown ASC, Age", {"Name", "Age"}, OrderKey("Id")
        ... )
        >>> str(spec)
        'Name DESC, Age ASC'
    """
    default_spec = OrderSpec.of(default)
    if order_by is None or not order_by.strip():
        return default_spec

    lookup = _as_lookup(whitelist)
    # Tabs and other whitespace separate the field from its direction.
    clauses = [" ".join(c.split()) for c in order_by.split(",") if c.strip()]

    spec = OrderSpec()
    unknown: list[str] = []
    for index, clause in enumerate(clauses):
        name, descending = _parse_clause(clause)
        field = lookup.get(name.lower())
        if field is None:
            unknown.append(name)
            if index == 0:
                spec = spec.then(default)
            continue
        if field in spec.fields:
            # The first occurrence of a field fixes its direction
            unknown.append(name)
            continue
        spec = spec.then(OrderKey(field, descending))

    if unknown:
        if policy == "strict":
            raise InvalidOrderBy(unknown, sorted(set(lookup.values())))
        LOGGER.debug(
            "Ignoring unknown or repeated order by field(s)",
            extra={"fields": unknown, "order_by": order_by},
        )
    return spec or default_spec


class OrderingCompiler:
    """Compiles orderBy strings for a target collection.

    Args:
        policy: How unknown sort fields are treated.

    Example:
        >>> compiler = OrderingCompiler()
        >>> str(compiler.compile("lastName desc, firstName", PLAYERS))
        'last_name DESC, first_name ASC'
    """

    def __init__(self, policy: OrderingPolicy = "lenient"):
        self.policy = policy

    @staticmethod
    def default_for(collection: CollectionDescriptor) -> OrderSpec:
        """The collection's default single-key ordering."""
        return OrderSpec.of(OrderKey(collection.identity_field))

    def compile(self, order_by: str | None, collection: CollectionDescriptor) -> OrderSpec:
        """Compile ``order_by`` against the collection's sortable fields.

        Args:
            order_by: The caller's orderBy string.
            collection: The collection being queried.

        Returns:
            The compiled OrderSpec.

        Raises:
            InvalidOrderBy: Under the strict policy, if a field is unknown.
        """
        return compile_order_by(
            order_by,
            collection.sort_lookup,
            OrderKey(collection.identity_field),
            self.policy,
        )
