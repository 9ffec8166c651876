"""Base model for resource schemas."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python.

    - populate_by_name: accept both ``costumeId`` and ``costume_id``
    - from_attributes: build responses straight from ORM entities
    - str_strip_whitespace: trim incoming strings
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )
