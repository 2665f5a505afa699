"""
Base Schemas.

Shared schema configuration and the standard error envelope.
"""

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from notepad.backend.core.utils import to_iso_utc, utc_now

# Naive UTC in Python, ISO 8601 with a Z suffix on the wire
UTCDatetime = Annotated[datetime, PlainSerializer(to_iso_utc, return_type=str, when_used="json")]


class CamelModel(BaseModel):
    """
    Base for request/response bodies.

    Fields are snake_case in Python and camelCase on the wire
    (category_id <-> categoryId). Either spelling is accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ResponseMetadata(BaseModel):
    """Metadata included in error responses."""

    timestamp: datetime = Field(default_factory=utc_now)
    request_id: str | None = None


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str
    message: str
    details: dict[str, Any] | None = None


class ErrorResponse(BaseModel):
    """Standard error response."""

    success: bool = False
    data: None = None
    error: ErrorDetail
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)
