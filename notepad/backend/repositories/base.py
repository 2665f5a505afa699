"""
Base Repository.

Base class for all repositories with common CRUD operations, plus the
presence-tracking types used for partial updates.

Lookups return None (and deletes return False) for unknown ids. Callers
that need an error, like the service layer, raise it themselves.
"""

import enum
from dataclasses import dataclass, fields
from typing import Any, Generic, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from notepad.backend.core.logging import get_logger
from notepad.backend.models.base import Base

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class Unset(enum.Enum):
    """Marker for a partial-update field that was not supplied."""

    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


UNSET = Unset.UNSET


@dataclass(frozen=True)
class Changes:
    """
    Base for partial-update payloads.

    Every field defaults to UNSET. A field holding any other value,
    including an empty string or empty list, is applied.
    """

    def present(self) -> dict[str, Any]:
        """Return only the fields that were explicitly supplied."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }


class BaseRepository(Generic[ModelType]):
    """
    Base repository with common CRUD operations.

    Subclasses should set the model class:

        class CategoryRepository(BaseRepository[Category]):
            model = Category
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id_or_none(self, id: str) -> ModelType | None:
        """Get a single record by ID, returning None if not found."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == str(id))
        )
        return result.scalar_one_or_none()

    async def exists(self, id: str) -> bool:
        """Check if a record exists by ID."""
        result = await self.session.execute(
            select(self.model.id).where(self.model.id == str(id))
        )
        return result.scalar_one_or_none() is not None

    async def count(self) -> int:
        """Count all records."""
        result = await self.session.execute(
            select(func.count()).select_from(self.model)
        )
        return result.scalar_one()

    async def delete_by_id(self, id: str) -> bool:
        """Delete a record by ID. Returns whether a row was removed."""
        result = await self.session.execute(
            delete(self.model).where(self.model.id == str(id))
        )
        await self.session.flush()
        return result.rowcount > 0
