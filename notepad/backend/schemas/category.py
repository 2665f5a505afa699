"""
Category Schemas.

Pydantic schemas for category API request/response validation.
"""

from pydantic import Field, field_validator

from notepad.backend.schemas.base import CamelModel, UTCDatetime


class CategoryCreate(CamelModel):
    """Schema for creating a new category."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Category name",
        examples=["Work Notes"],
    )
    color: str | None = Field(
        default=None,
        max_length=32,
        description="Display color; defaults to #3b82f6 when omitted or empty",
        examples=["#10b981"],
    )


class CategoryUpdate(CamelModel):
    """Schema for updating an existing category. Omitted fields are left alone."""

    name: str | None = Field(
        default=None,
        min_length=1,
        max_length=255,
        description="Category name",
    )
    color: str | None = Field(
        default=None,
        max_length=32,
        description="Display color",
    )

    @field_validator("name", "color")
    @classmethod
    def _reject_null(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class CategoryResponse(CamelModel):
    """Schema for a category in API responses."""

    id: str = Field(description="Category unique identifier")
    name: str = Field(description="Category name")
    color: str = Field(description="Display color")
    created_at: UTCDatetime = Field(description="Creation timestamp")


class CategoryWithCountResponse(CategoryResponse):
    """Schema for a category in the sidebar listing."""

    note_count: int = Field(description="Number of notes in the category")
