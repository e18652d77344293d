"""Read model settings using pydantic-settings."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class ReadModelSettings(BaseSettings):
    """Settings for decoding and executing read model queries.

    All settings can be configured via environment variables with the
    READMODEL_ prefix. For example:
    - READMODEL_DISCRIMINATOR_FIELD=queryType
    - READMODEL_ORDERING_POLICY=strict
    - READMODEL_MAX_TAKE=500

    Attributes:
        discriminator_field: Payload field naming the query shape.
        ordering_policy: "lenient" drops unknown sort fields and falls back
            to the default ordering; "strict" rejects them.
        max_take: Largest page size a caller may request. None means
            unbounded.
    """

    discriminator_field: str = "queryType"
    ordering_policy: Literal["lenient", "strict"] = "lenient"
    max_take: int | None = Field(default=None, ge=1)

    model_config = {"env_prefix": "READMODEL_"}
