"""
Category Model.

A named, colored grouping that owns zero or more notes.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from notepad.backend.models.base import Base, CreatedAtMixin, UUIDMixin

DEFAULT_CATEGORY_COLOR = "#3b82f6"

# Inserted once, in this order, into an empty categories table.
DEFAULT_CATEGORIES: tuple[tuple[str, str], ...] = (
    ("Work Notes", "#3b82f6"),
    ("Personal", "#10b981"),
    ("Ideas", "#ef4444"),
    ("Prompts", "#8b5cf6"),
)


class Category(UUIDMixin, CreatedAtMixin, Base):
    """
    Category database model.

    Categories have no updated_at column; only notes track edits.
    """

    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    color: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=DEFAULT_CATEGORY_COLOR,
        server_default=DEFAULT_CATEGORY_COLOR,
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name!r})>"
