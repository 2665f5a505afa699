"""
Note Model.

A titled document with HTML content, belonging to exactly one category.
"""

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from notepad.backend.models.base import Base, TimestampMixin, UUIDMixin


class Note(UUIDMixin, TimestampMixin, Base):
    """
    Note database model.

    Tags live in a single TEXT column holding a JSON array. The column
    is kept in its serialized form here; NoteRepository converts to and
    from list[str] at the repository boundary.

    category_id cascades on delete at the database level, and
    CategoryRepository also deletes a category's notes explicitly.
    """

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        server_default="",
    )
    category_id: Mapped[str] = mapped_column(
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    tags: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="[]",
        server_default="[]",
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r})>"
