# SQLAlchemy models package
from notepad.backend.models.base import Base
from notepad.backend.models.category import Category
from notepad.backend.models.note import Note

__all__ = [
    "Base",
    "Category",
    "Note",
]
