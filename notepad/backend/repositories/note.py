"""
Note Repository.

Data access layer for notes. Handles all database operations for the
Note model, including the JSON encoding of the tags column.
"""

import json
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy import literal_column, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from notepad.backend.core.utils import utc_now_seconds
from notepad.backend.models.note import Note
from notepad.backend.repositories.base import UNSET, BaseRepository, Changes, Unset


def serialize_tags(tags: Sequence[str]) -> str:
    """
    Encode tags for the tags column.

    The result is a JSON array in the given order. Non-ASCII text is
    kept literal so substring search over the column sees it.
    """
    return json.dumps(list(tags), ensure_ascii=False)


def deserialize_tags(raw: str | None) -> list[str]:
    """Decode the tags column. Empty or missing values decode to []."""
    if not raw:
        return []
    return list(json.loads(raw))


@dataclass(frozen=True)
class NoteRecord:
    """A note as read from storage, with tags decoded."""

    id: str
    title: str
    content: str
    category_id: str
    tags: list[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, note: Note) -> "NoteRecord":
        return cls(
            id=note.id,
            title=note.title,
            content=note.content,
            category_id=note.category_id,
            tags=deserialize_tags(note.tags),
            created_at=note.created_at,
            updated_at=note.updated_at,
        )


@dataclass(frozen=True)
class NoteChanges(Changes):
    """Partial note update. Fields left UNSET keep their stored value."""

    title: str | Unset = UNSET
    content: str | Unset = UNSET
    category_id: str | Unset = UNSET
    tags: list[str] | Unset = UNSET


class NoteRepository(BaseRepository[Note]):
    """
    Repository for Note model.

    Inherits lookup helpers from BaseRepository and adds
    note-specific queries and the per-category counts.
    """

    model = Note

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def list_notes(
        self,
        category_id: str | None = None,
        search: str | None = None,
    ) -> list[NoteRecord]:
        """
        List notes, most recently updated first.

        Args:
            category_id: Only notes in this category (empty means all)
            search: Case-insensitive substring matched against title,
                content, or the serialized tags; any match qualifies

        Returns:
            Matching notes with tags decoded
        """
        stmt = select(Note)

        if category_id:
            stmt = stmt.where(Note.category_id == category_id)

        if search:
            stmt = stmt.where(
                or_(
                    Note.title.icontains(search, autoescape=True),
                    Note.content.icontains(search, autoescape=True),
                    Note.tags.icontains(search, autoescape=True),
                )
            )

        stmt = stmt.order_by(
            Note.updated_at.desc(),
            literal_column("notes.rowid").desc(),
        )

        result = await self.session.execute(stmt)
        return [NoteRecord.from_model(n) for n in result.scalars().all()]

    async def get_note(self, id: str) -> NoteRecord | None:
        """Get a note by ID, or None if it does not exist."""
        note = await self.get_by_id_or_none(id)
        if note is None:
            return None
        return NoteRecord.from_model(note)

    async def create_note(
        self,
        *,
        title: str,
        category_id: str,
        content: str | None = None,
        tags: Sequence[str] | None = None,
    ) -> NoteRecord:
        """
        Create a note.

        Content defaults to "" and tags to []. created_at and
        updated_at are stamped with the same instant.
        """
        now = utc_now_seconds()
        note = Note(
            title=title,
            content=content or "",
            category_id=category_id,
            tags=serialize_tags(tags or []),
            created_at=now,
            updated_at=now,
        )
        self.session.add(note)
        await self.session.flush()
        return NoteRecord.from_model(note)

    async def update_note(
        self,
        id: str,
        changes: NoteChanges,
    ) -> NoteRecord | None:
        """
        Merge the supplied fields onto an existing note.

        updated_at is always refreshed, even when no field is supplied.
        Timestamps have one-second resolution, so the new value is at
        least one second past the previous one.

        Known drift: N updates to one note within the same second leave
        its updated_at up to N - 1 seconds ahead of the clock. The stamp
        returns to the clock on the first update after the clock passes it.

        Returns:
            Updated note, or None if the ID does not exist
        """
        note = await self.get_by_id_or_none(id)
        if note is None:
            return None

        values = changes.present()
        if "tags" in values:
            values["tags"] = serialize_tags(values["tags"])

        for key, value in values.items():
            setattr(note, key, value)

        note.updated_at = max(
            utc_now_seconds(),
            note.updated_at + timedelta(seconds=1),
        )

        await self.session.flush()
        return NoteRecord.from_model(note)

    async def delete_note(self, id: str) -> bool:
        """Delete a note. Returns whether a row was removed."""
        return await self.delete_by_id(id)

    async def category_note_counts(self) -> dict[str, int]:
        """Count notes per category ID by scanning the notes table."""
        result = await self.session.execute(select(Note.category_id))
        return dict(Counter(result.scalars().all()))
