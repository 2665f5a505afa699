"""
Category Service.

Business logic layer for categories. Orchestrates repositories,
joins note counts, and turns missing ids into NotFoundError.
"""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from notepad.backend.repositories.category import (
    CategoryChanges,
    CategoryRecord,
    CategoryRepository,
)
from notepad.backend.repositories.note import NoteRepository
from notepad.backend.schemas.category import CategoryCreate, CategoryUpdate
from notepad.backend.services.base import BaseService


@dataclass(frozen=True)
class CategoryWithCount(CategoryRecord):
    """A category plus the number of notes that reference it."""

    note_count: int = 0


class CategoryService(BaseService):
    """
    Service for category business logic.

    Handles category creation, updates, deletion (which cascades
    to notes) and the sidebar listing with note counts.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = CategoryRepository(session)
        self.note_repo = NoteRepository(session)

    async def list_categories_with_counts(self) -> list[CategoryWithCount]:
        """
        List all categories, oldest first, with their note counts.

        Categories without notes report a count of 0.
        """
        categories = await self.repo.list_categories()
        counts = await self.note_repo.category_note_counts()

        self._log_debug("Listing categories", count=len(categories))
        return [
            CategoryWithCount(
                id=category.id,
                name=category.name,
                color=category.color,
                created_at=category.created_at,
                note_count=counts.get(category.id, 0),
            )
            for category in categories
        ]

    async def get_category(self, category_id: str) -> CategoryRecord:
        """
        Get a category by ID.

        Raises:
            NotFoundError: If category not found
        """
        return self._require_found(
            await self.repo.get_category(category_id), "Category", category_id,
        )

    async def create_category(self, data: CategoryCreate) -> CategoryRecord:
        """
        Create a new category.

        Args:
            data: Category creation data

        Returns:
            Created category
        """
        self._log_operation("Creating category", name=data.name)

        category = await self._execute_db_operation(
            "create_category",
            self.repo.create_category(name=data.name, color=data.color),
        )

        self._log_debug("Category created", category_id=category.id)
        return category

    async def update_category(
        self,
        category_id: str,
        data: CategoryUpdate,
    ) -> CategoryRecord:
        """
        Update an existing category. Only supplied fields change.

        Raises:
            NotFoundError: If category not found
        """
        update_data = data.model_dump(exclude_unset=True)

        self._log_operation(
            "Updating category",
            category_id=category_id,
            fields=list(update_data.keys()),
        )

        category = await self._execute_db_operation(
            "update_category",
            self.repo.update_category(category_id, CategoryChanges(**update_data)),
        )
        return self._require_found(category, "Category", category_id)

    async def delete_category(self, category_id: str) -> None:
        """
        Delete a category together with all of its notes.

        Raises:
            NotFoundError: If category not found
        """
        self._log_operation("Deleting category", category_id=category_id)

        deleted = await self._execute_db_operation(
            "delete_category",
            self.repo.delete_category(category_id),
        )
        self._require_found(deleted, "Category", category_id)
