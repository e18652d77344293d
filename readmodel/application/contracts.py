"""Request and response envelopes for the read model endpoint."""

from collections.abc import Mapping
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from ..domain import QueryRequestError, QueryResult
from .decoding import QueryParams, group_params

ENVELOPE_KEYS = ("id", "orderBy", "skip", "take", "dataType")


class ReadModelRequest(BaseModel):
    """A read model query request.

    Attributes:
        id: Optional caller-supplied request identifier.
        query: The untyped query object, including its discriminator.
        order_by: Optional ordering such as ``"lastName ASC, firstName DESC"``.
        skip: Records to skip.
        take: Page size. None returns every remaining record.
        data_type: Name of the collection to query.
        from_query_string: True when ``query`` holds raw query string
            values that still need type sniffing.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: UUID | None = None
    query: dict[str, Any] = Field(default_factory=dict)
    order_by: str | None = None
    skip: int = 0
    take: int | None = None
    data_type: str
    from_query_string: bool = Field(default=False, exclude=True)

    @classmethod
    def parse(cls, payload: Mapping[str, Any] | str | bytes) -> "ReadModelRequest":
        """Validate a JSON request body.

        Raises:
            QueryRequestError: If the envelope itself is malformed.
        """
        try:
            if isinstance(payload, (str, bytes)):
                return cls.model_validate_json(payload)
            return cls.model_validate(payload)
        except ValidationError as e:
            raise QueryRequestError(f"Invalid read model request: {e}") from e

    @classmethod
    def from_query_params(cls, params: QueryParams) -> "ReadModelRequest":
        """Build a request from a flattened query string.

        The keys ``id``, ``orderBy``, ``skip``, ``take`` and ``dataType``
        (in any case) form the envelope; every other key belongs to the
        query object and is kept as sent.

        Raises:
            QueryRequestError: If the envelope itself is malformed.

        Example:
            >>> request = ReadModelRequest.from_query_params(
            ...     "dataType=SuperCoachPlayer&queryType=PlayersByTeam&teamId=7&take=10"
            ... )
            >>> request.query
            {'queryType': 'PlayersByTeam', 'teamId': '7'}
            >>> request.take
            10
        """
        envelope_keys = {key.lower(): key for key in ENVELOPE_KEYS}
        envelope: dict[str, Any] = {}
        query: dict[str, Any] = {}
        for key, values in group_params(params).items():
            envelope_key = envelope_keys.get(key.lower())
            if envelope_key is None:
                query[key] = values[0] if len(values) == 1 else values
            elif values[0] != "":
                envelope[envelope_key] = values[0]
        return cls.parse({**envelope, "query": query, "from_query_string": True})


class ReadModelResponse(BaseModel):
    """A page of read model records.

    Serialize with ``to_payload()`` to get camelCase keys.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    data: list[Any]
    total_count: int
    skip: int
    take: int | None
    data_type: str

    @classmethod
    def from_result(cls, result: QueryResult, data_type: str) -> "ReadModelResponse":
        return cls(
            data=list(result.items),
            total_count=result.total_count,
            skip=result.skip,
            take=result.take,
            data_type=data_type,
        )

    def to_payload(self) -> dict[str, Any]:
        """Dump to JSON-compatible data with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
