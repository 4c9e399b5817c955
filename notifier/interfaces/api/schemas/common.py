"""Shared schema helpers."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON while keeping snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class CountResponse(CamelModel):
    count: int


class ErrorResponse(CamelModel):
    message: str
    errors: list[str] = []


__all__ = ["CamelModel", "CountResponse", "ErrorResponse"]
