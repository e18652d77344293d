"""Polymorphic decoding of query payloads into concrete query shapes.

Payloads arrive either as a JSON object or as a flattened query string.
Both channels are reduced to a mapping of candidate field values and then
pass through the same structural step, so a handler sees the same shape
regardless of transport.
"""

import re
from collections.abc import Iterable, Mapping, Sequence
from decimal import Decimal, InvalidOperation
from typing import Any, get_args
from urllib.parse import parse_qsl

from pydantic import ValidationError
from pydantic_core import from_json

from ..domain import (
    InvalidFieldValue,
    MissingDiscriminator,
    MissingRequiredField,
    QueryRequestError,
    SearchQuery,
)
from .registry import QueryTypeRegistry, ShapeDescriptor

QueryParams = str | Mapping[str, str | Sequence[str]] | Iterable[tuple[str, str]]

_INTEGER = re.compile(r"^[+-]?\d+$")


def sniff_value(value: str) -> int | Decimal | bool | str:
    """Guess the type of a single query string value.

    Tries integer, then decimal, then boolean, and falls back to the
    original string.

    Examples:
        >>> sniff_value("7")
        7
        >>> sniff_value("7.5")
        Decimal('7.5')
        >>> sniff_value("TRUE")
        True
        >>> sniff_value("Ruck")
        'Ruck'
    """
    text = value.strip()
    if _INTEGER.match(text):
        return int(text)
    try:
        number = Decimal(text)
    except InvalidOperation:
        number = None
    if number is not None and number.is_finite():
        return number
    if text.lower() in ("true", "false"):
        return text.lower() == "true"
    return value


def group_params(params: QueryParams) -> dict[str, list[str]]:
    """Group query string parameters by key.

    Keys are compared without regard to case; the first spelling seen is
    kept. Accepts a raw query string, a mapping of values or value lists,
    or an iterable of key/value pairs.
    """
    if isinstance(params, str):
        pairs: Iterable[tuple[str, str]] = parse_qsl(params.lstrip("?"), keep_blank_values=True)
    elif isinstance(params, Mapping):
        pairs = (
            (key, item)
            for key, value in params.items()
            for item in ([value] if isinstance(value, str) else value)
        )
    else:
        pairs = params

    grouped: dict[str, list[str]] = {}
    spelling: dict[str, str] = {}
    for key, value in pairs:
        canonical = spelling.setdefault(key.lower(), key)
        grouped.setdefault(canonical, []).append(value)
    return grouped


def _accepts_text(annotation: Any) -> bool:
    if annotation is str:
        return True
    return str in get_args(annotation)


class PolymorphicQueryDecoder:
    """Decodes untyped payloads into the query shape their discriminator names.

    Decoding is all-or-nothing: either a fully validated shape is returned
    or an exception is raised.

    Example:
        >>> decoder = PolymorphicQueryDecoder(registry)
        >>> decoder.decode({"queryType": "PlayersByTeam", "teamId": 7})
        PlayersByTeam(team_id=7, season=None)
        >>> decoder.decode_query_string("queryType=PlayersByTeam&teamId=7")
        PlayersByTeam(team_id=7, season=None)
    """

    def __init__(
        self,
        registry: QueryTypeRegistry,
        discriminator_field: str = "queryType",
    ):
        self.registry = registry
        self.discriminator_field = discriminator_field

    def decode(self, payload: Mapping[str, Any] | str | bytes) -> SearchQuery:
        """Decode a JSON object into a query shape.

        Args:
            payload: The query object, either parsed or as raw JSON text.

        Returns:
            The concrete query shape.

        Raises:
            MissingDiscriminator: If the discriminator is absent or empty.
            UnknownQueryType: If the discriminator names no shape.
            MissingRequiredField: If a required field is absent.
            InvalidFieldValue: If a field cannot be coerced to its type.
        """
        if isinstance(payload, (str, bytes)):
            try:
                payload = from_json(payload)
            except ValueError as e:
                raise QueryRequestError(f"Query payload is not valid JSON: {e}") from e
        if not isinstance(payload, Mapping):
            raise QueryRequestError("Query payload must be a JSON object")

        descriptor = self.registry.resolve(self._discriminator(payload))
        return self._build(descriptor, payload)

    def decode_query_string(self, params: QueryParams) -> SearchQuery:
        """Decode flattened query string parameters into a query shape.

        Single values are type-sniffed (integer, decimal, boolean, string);
        repeated keys become a list; empty values are dropped. Fields
        declared as text receive the value exactly as sent.

        Args:
            params: The query string parameters.

        Returns:
            The concrete query shape.

        Raises:
            Same as ``decode``.
        """
        grouped = group_params(params)
        payload: dict[str, Any] = {}
        raw: dict[str, Any] = {}
        for key, values in grouped.items():
            if len(values) > 1:
                payload[key] = raw[key] = list(values)
            elif values[0] != "":
                raw[key] = values[0]
                payload[key] = sniff_value(values[0])

        descriptor = self.registry.resolve(self._discriminator(raw))
        return self._build(descriptor, payload, raw)

    def _discriminator(self, payload: Mapping[str, Any]) -> str:
        wanted = self.discriminator_field.lower()
        for key, value in payload.items():
            if key.lower() == wanted:
                if isinstance(value, list):
                    value = value[0] if value else None
                if isinstance(value, str) and value.strip():
                    return value.strip()
                break
        raise MissingDiscriminator(self.discriminator_field)

    def _build(
        self,
        descriptor: ShapeDescriptor,
        payload: Mapping[str, Any],
        raw: Mapping[str, Any] | None = None,
    ) -> SearchQuery:
        lookup = {key: spec for spec in descriptor.fields for key in spec.keys}
        values: dict[str, Any] = {}
        for key, value in payload.items():
            spec = lookup.get(key.lower())
            if spec is None or spec.name in values:
                continue
            if raw is not None and key in raw and _accepts_text(spec.annotation):
                value = raw[key]
            values[spec.name] = value

        missing = [
            spec.alias
            for spec in descriptor.fields
            if spec.required and values.get(spec.name) is None
        ]
        if missing:
            raise MissingRequiredField(descriptor.discriminator, missing)

        try:
            return descriptor.create(values)
        except ValidationError as e:
            errors = {
                ".".join(str(part) for part in error["loc"]): error["msg"]
                for error in e.errors()
            }
            raise InvalidFieldValue(descriptor.discriminator, errors) from e
