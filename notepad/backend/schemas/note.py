"""
Note Schemas.

Pydantic schemas for note API request/response validation.
"""

from pydantic import Field, field_validator

from notepad.backend.schemas.base import CamelModel, UTCDatetime


class NoteCreate(CamelModel):
    """Schema for creating a new note."""

    title: str = Field(
        ...,
        description="Note title (may be empty)",
        examples=["Meeting notes"],
    )
    content: str = Field(
        default="",
        description="Note body as HTML",
        examples=["<p>Agenda</p>"],
    )
    category_id: str = Field(
        ...,
        min_length=1,
        description="Owning category ID",
    )
    tags: list[str] = Field(
        default_factory=list,
        description="Ordered tags; duplicates allowed",
        examples=[["planning", "q3"]],
    )


class NoteUpdate(CamelModel):
    """Schema for updating an existing note. Omitted fields are left alone."""

    title: str | None = Field(
        default=None,
        description="Note title",
    )
    content: str | None = Field(
        default=None,
        description="Note body as HTML",
    )
    category_id: str | None = Field(
        default=None,
        min_length=1,
        description="Owning category ID",
    )
    tags: list[str] | None = Field(
        default=None,
        description="Replacement tag list",
    )

    @field_validator("title", "content", "category_id", "tags")
    @classmethod
    def _reject_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class NoteResponse(CamelModel):
    """Schema for a note in API responses."""

    id: str = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note body as HTML")
    category_id: str = Field(description="Owning category ID")
    tags: list[str] = Field(description="Ordered tags")
    created_at: UTCDatetime = Field(description="Creation timestamp")
    updated_at: UTCDatetime = Field(description="Last update timestamp")
