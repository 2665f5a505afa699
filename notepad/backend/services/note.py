"""
Note Service.

Business logic layer for notes. Orchestrates repositories,
checks category references, and implements business rules.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from notepad.backend.core.exceptions import ValidationError
from notepad.backend.repositories.category import CategoryRepository
from notepad.backend.repositories.note import NoteChanges, NoteRecord, NoteRepository
from notepad.backend.schemas.note import NoteCreate, NoteUpdate
from notepad.backend.services.base import BaseService


class NoteService(BaseService):
    """
    Service for note business logic.

    Handles note creation, updates, and retrieval with
    proper validation and error handling.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)
        self.category_repo = CategoryRepository(session)

    async def _require_category(self, category_id: str) -> None:
        """Raise ValidationError unless the category exists."""
        if not await self.category_repo.exists(category_id):
            raise ValidationError(
                "Category does not exist",
                details={"categoryId": f"No category with id {category_id!r}"},
            )

    async def create_note(self, data: NoteCreate) -> NoteRecord:
        """
        Create a new note.

        Args:
            data: Note creation data

        Returns:
            Created note

        Raises:
            ValidationError: If the category does not exist
        """
        self._log_operation(
            "Creating note",
            title=data.title,
            category_id=data.category_id,
        )
        await self._require_category(data.category_id)

        note = await self._execute_db_operation(
            "create_note",
            self.repo.create_note(
                title=data.title,
                content=data.content,
                category_id=data.category_id,
                tags=data.tags,
            ),
        )

        self._log_debug("Note created", note_id=note.id)
        return note

    async def get_note(self, note_id: str) -> NoteRecord:
        """
        Get a note by ID.

        Raises:
            NotFoundError: If note not found
        """
        return self._require_found(await self.repo.get_note(note_id), "Note", note_id)

    async def list_notes(
        self,
        category_id: str | None = None,
        search: str | None = None,
    ) -> list[NoteRecord]:
        """
        List notes, most recently updated first.

        Args:
            category_id: Restrict to one category
            search: Case-insensitive substring over title, content and tags

        Returns:
            List of notes
        """
        self._log_debug("Listing notes", category_id=category_id, search=search)
        return await self.repo.list_notes(category_id=category_id, search=search)

    async def update_note(self, note_id: str, data: NoteUpdate) -> NoteRecord:
        """
        Update an existing note.

        Only supplied fields change; updated_at is refreshed regardless.

        Raises:
            NotFoundError: If note not found
            ValidationError: If moved to a category that does not exist
        """
        update_data = data.model_dump(exclude_unset=True)

        self._log_operation(
            "Updating note",
            note_id=note_id,
            fields=list(update_data.keys()),
        )

        self._require_found(await self.repo.exists(note_id), "Note", note_id)
        if "category_id" in update_data:
            await self._require_category(update_data["category_id"])

        note = await self._execute_db_operation(
            "update_note",
            self.repo.update_note(note_id, NoteChanges(**update_data)),
        )
        return self._require_found(note, "Note", note_id)

    async def delete_note(self, note_id: str) -> None:
        """
        Delete a note.

        Raises:
            NotFoundError: If note not found
        """
        self._log_operation("Deleting note", note_id=note_id)

        deleted = await self._execute_db_operation(
            "delete_note",
            self.repo.delete_note(note_id),
        )
        self._require_found(deleted, "Note", note_id)
