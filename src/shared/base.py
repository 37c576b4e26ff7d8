from __future__ import annotations

from pydantic import BaseModel
from pydantic.config import ConfigDict


def to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(word.capitalize() for word in parts[1:])


class BaseSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenSchema(BaseSchema):
    """Schema whose instances cannot be mutated after validation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class RecordModel(BaseModel):
    """Raw storage row; accepts snake_case columns or camelCase form keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")
