"""Descriptors for the collections a read model query can target."""

from functools import cached_property
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class CollectionDescriptor(BaseModel):
    """Describes one queryable collection of read model records.

    The descriptor answers "what are we querying": it names the data type
    callers use to select the collection, the storage collection holding
    the documents, the record model documents are validated into, and the
    whitelist of fields results may be ordered by.

    Example:
        >>> PLAYERS = CollectionDescriptor(
        ...     name="SuperCoachPlayer",
        ...     aliases=("SuperCoachPlayerDataContract",),
        ...     collection_name="supercoach_players",
        ...     record_type=SuperCoachPlayer,
        ...     identity_field="player_id",
        ...     sortable_fields=("player_id", "last_name", "total_points"),
        ... )
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    """Primary data type name."""

    aliases: tuple[str, ...] = ()
    """Additional data type names resolving to this collection."""

    collection_name: str
    """Name of the collection in the document store."""

    record_type: type[BaseModel]
    """Model that stored documents are validated into."""

    identity_field: str
    """Field used for the default ordering."""

    sortable_fields: tuple[str, ...] = ()
    """Record attribute names results may be ordered by."""

    @model_validator(mode="after")
    def _check_fields(self) -> "CollectionDescriptor":
        known = self.record_type.model_fields
        for field in (self.identity_field, *self.sortable_fields):
            if field not in known:
                raise ValueError(
                    f"{self.record_type.__name__} has no field '{field}'"
                )
        return self

    @property
    def data_type_names(self) -> tuple[str, ...]:
        """All names this collection can be resolved by."""
        return (self.name, *self.aliases)

    @cached_property
    def sort_lookup(self) -> dict[str, str]:
        """Map lower-cased field names and aliases to record attribute names.

        The identity field is always sortable even when it is not listed.
        """
        lookup: dict[str, str] = {}
        fields = self.record_type.model_fields
        for name in (self.identity_field, *self.sortable_fields):
            lookup[name.lower()] = name
            alias = fields[name].alias
            if alias:
                lookup[alias.lower()] = name
        return lookup

    def to_record(self, document: dict[str, Any]) -> BaseModel:
        """Validate a stored document into this collection's record type."""
        return self.record_type.model_validate(document)
