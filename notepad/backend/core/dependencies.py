"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from notepad.backend.core.database import Database


def get_database(request: Request) -> Database:
    """Return the Database opened by the application lifespan."""
    database = getattr(request.app.state, "database", None)
    if database is None or not database.is_open:
        raise RuntimeError("Database is not open")
    return database


async def get_db_session(
    database: Annotated[Database, Depends(get_database)],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.

    One session and one transaction per request: committed after the
    endpoint returns, rolled back if it raises.

    Usage in endpoints:
        @router.get("/items")
        async def get_items(db: DbSession):
            ...
    """
    async with database.session() as session:
        yield session


# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_db_session)]

