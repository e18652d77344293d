"""Query shape base class for the read model endpoint.

A query shape is a named, fixed set of filter parameters. Shapes are
decoded from untyped request payloads and dispatched to exactly one
handler by their concrete type.
"""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SearchQuery(BaseModel):
    """Base class for all query shapes.

    Subclasses declare their discriminator through the ``query_type`` class
    variable (falling back to the class name) and their filters as ordinary
    pydantic fields. Fields without a default are required; optional fields
    default to ``None`` which means "no filter".

    Shapes are frozen: once decoded they cannot be modified, and two shapes
    decoded from the same payload compare equal.

    Field names are snake_case in Python and camelCase on the wire; both
    spellings are accepted when validating.

    Examples:
        >>> class PlayersByTeam(SearchQuery):
        ...     query_type: ClassVar[str] = "PlayersByTeam"
        ...     team_id: int
        ...     season: int | None = None
        >>>
        >>> PlayersByTeam.model_validate({"teamId": 7}).team_id
        7
    """

    query_type: ClassVar[str]

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @classmethod
    def discriminator(cls) -> str:
        """Return the discriminator string identifying this shape."""
        declared = cls.__dict__.get("query_type")
        return declared if isinstance(declared, str) and declared else cls.__name__
