"""Base pydantic model for centralized configuration of schema definitions."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchemaModel(BaseModel):
    """Base pydantic model shared by request and response schemas.

    Field names are snake_case; camelCase aliases are accepted on input and
    used on output only when a caller dumps with ``by_alias=True`` (the
    Prometheus API does, as do pagination blocks and the tutor session and
    resource download payloads the frontend reads in camelCase).
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        extra="ignore",
        str_strip_whitespace=True,
    )
