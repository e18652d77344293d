from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Book(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    isbn: str
    title: str
    author: str
    genre: str | None = None
    published_year: int | None = None
