"""Common response wrapper schemas for API responses."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base schema whose fields are camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SuccessResponse(CamelModel):
    """Generic success response wrapper."""

    success: bool = Field(True, description="Whether the operation was successful")
    message: str = Field(..., description="Response message")


class ErrorResponse(CamelModel):
    """Body of every error response. Error details are added as extra keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    success: bool = False
    message: str


class PaginatedResponse(CamelModel, Generic[T]):
    """Generic pagination wrapper."""

    items: list[T]
    total: int
    offset: int
    limit: int
