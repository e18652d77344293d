"""Registries resolving query shapes and collections by name.

Both registries are built once when the application is assembled and are
read-only afterwards, so they can be shared by concurrent requests
without locking.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from ..domain import (
    CollectionDescriptor,
    DuplicateDataType,
    DuplicateDiscriminator,
    SearchQuery,
    UnknownDataType,
    UnknownQueryType,
)


@dataclass(frozen=True)
class FieldSpec:
    """Decoder metadata for one field of a query shape."""

    name: str
    alias: str
    required: bool
    annotation: Any

    @property
    def keys(self) -> tuple[str, ...]:
        """Lower-cased payload keys that populate this field."""
        return tuple({self.name.lower(), self.alias.lower()})


@dataclass(frozen=True)
class ShapeDescriptor:
    """Registry entry pairing a discriminator with its query shape.

    Field metadata is captured once at registration so decoding a request
    never has to inspect the shape class again.
    """

    discriminator: str
    query_type: type[SearchQuery]
    fields: tuple[FieldSpec, ...]

    @staticmethod
    def of(query_type: type[SearchQuery]) -> "ShapeDescriptor":
        """Describe a query shape class.

        Args:
            query_type: The SearchQuery subclass to describe.

        Returns:
            The descriptor for the shape.
        """
        fields = tuple(
            FieldSpec(
                name=name,
                alias=info.alias or name,
                required=info.is_required(),
                annotation=info.annotation,
            )
            for name, info in query_type.model_fields.items()
        )
        return ShapeDescriptor(query_type.discriminator(), query_type, fields)

    def create(self, values: dict[str, Any]) -> SearchQuery:
        """Construct the shape from already-normalized field values."""
        return self.query_type.model_validate(values)


class QueryTypeRegistry:
    """Maps discriminator strings to query shapes.

    Lookups ignore case so clients may send ``playersbyteam`` for
    ``PlayersByTeam``. Registering two shapes whose discriminators differ
    only by case is rejected.
    """

    @staticmethod
    def from_query_types(query_types: Iterable[type[SearchQuery]]) -> "QueryTypeRegistry":
        """Build a registry from a list of query shape classes.

        Args:
            query_types: Shape classes to register.

        Returns:
            A configured QueryTypeRegistry.

        Raises:
            DuplicateDiscriminator: If two shapes share a discriminator.
        """
        return QueryTypeRegistry(ShapeDescriptor.of(t) for t in query_types)

    def __init__(self, descriptors: Iterable[ShapeDescriptor] = ()) -> None:
        self._descriptors: dict[str, ShapeDescriptor] = {}
        for descriptor in descriptors:
            key = descriptor.discriminator.lower()
            existing = self._descriptors.get(key)
            if existing is not None and existing.query_type is not descriptor.query_type:
                raise DuplicateDiscriminator(
                    descriptor.discriminator, existing.query_type, descriptor.query_type
                )
            self._descriptors[key] = descriptor

    def resolve(self, discriminator: str) -> ShapeDescriptor:
        """Look up the shape for a discriminator.

        Args:
            discriminator: The discriminator sent by the caller.

        Returns:
            The matching ShapeDescriptor.

        Raises:
            UnknownQueryType: If no shape uses this discriminator.
        """
        try:
            return self._descriptors[discriminator.lower()]
        except KeyError:
            raise UnknownQueryType(discriminator, self.discriminators()) from None

    def discriminators(self) -> list[str]:
        """List the discriminators of every registered shape."""
        return [d.discriminator for d in self._descriptors.values()]

    def query_types(self) -> list[type[SearchQuery]]:
        """List every registered shape class."""
        return [d.query_type for d in self._descriptors.values()]

    def __contains__(self, discriminator: object) -> bool:
        return isinstance(discriminator, str) and discriminator.lower() in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)


class DocumentTypeResolver:
    """Maps data type names to collection descriptors.

    Each collection is reachable by its name and by any of its aliases,
    compared without regard to case.
    """

    @staticmethod
    def from_collections(
        collections: Iterable[CollectionDescriptor],
    ) -> "DocumentTypeResolver":
        """Build a resolver from a list of collection descriptors.

        Args:
            collections: Descriptors to register.

        Returns:
            A configured DocumentTypeResolver.

        Raises:
            DuplicateDataType: If two descriptors claim the same name.
        """
        resolver = DocumentTypeResolver()
        for collection in collections:
            resolver._add(collection)
        return resolver

    def __init__(self) -> None:
        self._collections: dict[str, CollectionDescriptor] = {}

    def _add(self, collection: CollectionDescriptor) -> None:
        keys = {name.lower(): name for name in collection.data_type_names}
        for key, name in keys.items():
            if key in self._collections:
                raise DuplicateDataType(name)
            self._collections[key] = collection

    def resolve(self, data_type: str) -> CollectionDescriptor:
        """Look up the collection for a data type name.

        Args:
            data_type: The data type name sent by the caller.

        Returns:
            The matching CollectionDescriptor.

        Raises:
            UnknownDataType: If no collection answers to this name.
        """
        try:
            return self._collections[data_type.lower()]
        except KeyError:
            raise UnknownDataType(data_type, self.data_types()) from None

    def data_types(self) -> list[str]:
        """List every registered data type name, aliases included."""
        return [
            name
            for collection in self.collections()
            for name in collection.data_type_names
        ]

    def collections(self) -> list[CollectionDescriptor]:
        """List each registered collection once."""
        unique: dict[int, CollectionDescriptor] = {}
        for collection in self._collections.values():
            unique.setdefault(id(collection), collection)
        return list(unique.values())
