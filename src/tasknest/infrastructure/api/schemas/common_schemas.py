"""Response envelope shared by every endpoint.

Every response body has the shape ``{success, message?, data?, errors?}``.
Field names are camelCase on the wire.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ApiModel(BaseModel):
    """Base for request and response bodies: camelCase aliases, read from entities."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class StrictApiModel(ApiModel):
    """Request body that rejects unknown fields."""

    model_config = ConfigDict(extra="forbid")


class ErrorDetail(BaseModel):
    """Detail for a single validation error."""

    field: str | None = Field(None, description="Field name that failed validation")
    message: str = Field(..., description="Human-readable error message")
    code: str | None = Field(None, description="Machine-readable error code")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope for every API response."""

    success: bool = True
    message: str | None = None
    data: T | None = None
    errors: list[ErrorDetail] | None = None
