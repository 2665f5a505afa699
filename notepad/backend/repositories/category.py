"""
Category Repository.

Data access layer for categories. Handles all database operations
for the Category model and returns plain CategoryRecord values.
"""

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import delete, literal_column, select
from sqlalchemy.ext.asyncio import AsyncSession

from notepad.backend.core.utils import utc_now_seconds
from notepad.backend.models.category import DEFAULT_CATEGORY_COLOR, Category
from notepad.backend.models.note import Note
from notepad.backend.repositories.base import UNSET, BaseRepository, Changes, Unset


@dataclass(frozen=True)
class CategoryRecord:
    """A category as read from storage."""

    id: str
    name: str
    color: str
    created_at: datetime

    @classmethod
    def from_model(cls, category: Category) -> "CategoryRecord":
        return cls(
            id=category.id,
            name=category.name,
            color=category.color,
            created_at=category.created_at,
        )


@dataclass(frozen=True)
class CategoryChanges(Changes):
    """Partial category update. Fields left UNSET keep their stored value."""

    name: str | Unset = UNSET
    color: str | Unset = UNSET


class CategoryRepository(BaseRepository[Category]):
    """
    Repository for Category model.

    Inherits lookup helpers from BaseRepository and adds the
    category-specific queries, including the cascading delete.
    """

    model = Category

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def list_categories(self) -> list[CategoryRecord]:
        """
        Get all categories, oldest first.

        Categories created in the same second keep insertion order.
        """
        result = await self.session.execute(
            select(Category).order_by(
                Category.created_at,
                literal_column("categories.rowid"),
            )
        )
        return [CategoryRecord.from_model(c) for c in result.scalars().all()]

    async def get_category(self, id: str) -> CategoryRecord | None:
        """Get a category by ID, or None if it does not exist."""
        category = await self.get_by_id_or_none(id)
        if category is None:
            return None
        return CategoryRecord.from_model(category)

    async def create_category(
        self,
        name: str,
        color: str | None = None,
    ) -> CategoryRecord:
        """
        Create a category.

        Args:
            name: Display name
            color: Display color; None or "" falls back to the default blue

        Returns:
            The stored category
        """
        category = Category(
            name=name,
            color=color or DEFAULT_CATEGORY_COLOR,
            created_at=utc_now_seconds(),
        )
        self.session.add(category)
        await self.session.flush()
        return CategoryRecord.from_model(category)

    async def update_category(
        self,
        id: str,
        changes: CategoryChanges,
    ) -> CategoryRecord | None:
        """
        Merge the supplied fields onto an existing category.

        No validation happens here; an explicitly supplied empty
        name is stored as-is.

        Returns:
            Updated category, or None if the ID does not exist
        """
        category = await self.get_by_id_or_none(id)
        if category is None:
            return None

        for key, value in changes.present().items():
            setattr(category, key, value)

        await self.session.flush()
        return CategoryRecord.from_model(category)

    async def delete_category(self, id: str) -> bool:
        """
        Delete a category and every note that belongs to it.

        Notes are removed explicitly before the category row. Both
        statements run in the session's current transaction, so they
        commit or roll back together.

        Returns:
            Whether the category existed
        """
        await self.session.execute(delete(Note).where(Note.category_id == id))
        result = await self.session.execute(
            delete(Category).where(Category.id == id)
        )
        await self.session.flush()
        return result.rowcount > 0

    async def seed_defaults(self, defaults: tuple[tuple[str, str], ...]) -> int:
        """
        Insert the given (name, color) categories if the table is empty.

        Returns:
            Number of categories inserted (0 when any category exists)
        """
        if await self.count() > 0:
            return 0

        now = utc_now_seconds()
        for name, color in defaults:
            self.session.add(Category(name=name, color=color, created_at=now))

        await self.session.flush()
        return len(defaults)
