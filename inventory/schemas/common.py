"""Response envelope, pagination container and shared schema configuration."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")

DEFAULT_SUCCESS_MESSAGE = "Operation successful"


class CamelModel(BaseModel):
    """Base for API payloads: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[DataT]):
    """Envelope wrapping every API response body."""

    success: bool = Field(..., description="Whether the operation succeeded")
    message: str = Field(default="", description="Human-readable outcome")
    data: DataT | None = Field(default=None, description="Payload on success")
    errors: list[str] | None = Field(default=None, description="Error details on failure")

    @classmethod
    def ok(cls, data: DataT, message: str = DEFAULT_SUCCESS_MESSAGE) -> "ApiResponse[DataT]":
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, message: str, errors: list[str] | None = None) -> "ApiResponse[DataT]":
        return cls(success=False, message=message, errors=errors)


class Page(CamelModel, Generic[DataT]):
    """One page of results plus the counts needed to navigate the rest."""

    items: list[DataT]
    page_number: int
    page_size: int
    total_count: int
    total_pages: int
    has_previous: bool
    has_next: bool
