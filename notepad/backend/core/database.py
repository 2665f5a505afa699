"""
Database Configuration.

SQLAlchemy async engine and session management for the SQLite store.

A Database instance is created by the application lifespan, opened at
startup (schema + default categories) and closed at shutdown. Request
handlers reach it through the get_db_session dependency.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from notepad.backend.core.logging import get_logger, log_with_source
from notepad.backend.models import Base
from notepad.backend.models.category import DEFAULT_CATEGORIES
from notepad.backend.repositories.category import CategoryRepository

logger = get_logger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    """SQLite ignores REFERENCES clauses unless this pragma is set per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_database_engine(url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    For SQLite, foreign keys are switched on for every connection.
    In-memory databases share a single connection so every session
    sees the same data. File databases get their parent directory
    created on demand.
    """
    parsed = make_url(url)
    kwargs: dict[str, Any] = {"echo": echo}

    if parsed.get_backend_name() == "sqlite":
        if parsed.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
            kwargs["connect_args"] = {"check_same_thread": False}
        else:
            Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_async_engine(url, **kwargs)

    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    logger.debug("Database engine created", extra={"url": parsed.render_as_string()})
    return engine


async def create_schema(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet. Safe to run on every startup."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


class Database:
    """
    Owner of the engine and session factory for one database.

    Usage:
        database = Database("sqlite+aiosqlite:///./database.sqlite")
        await database.open()
        async with database.session() as session:
            ...
        await database.close()
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = url
        self.echo = echo
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        """The open engine. Raises RuntimeError before open()."""
        if self._engine is None:
            raise RuntimeError("Database is not open")
        return self._engine

    async def open(self, seed_defaults: bool = True) -> None:
        """
        Connect, create missing tables, and optionally seed categories.

        Args:
            seed_defaults: Insert the default categories when none exist
        """
        self._engine = create_database_engine(self.url, echo=self.echo)
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        await create_schema(self._engine)
        logger.info("Database schema ready")

        if seed_defaults:
            await self.seed()

    async def seed(self) -> int:
        """
        Insert the default categories if the categories table is empty.

        Returns:
            Number of categories inserted
        """
        async with self.session() as session:
            inserted = await CategoryRepository(session).seed_defaults(DEFAULT_CATEGORIES)

        if inserted:
            log_with_source(
                logger, "internal", "info",
                "Default categories seeded", count=inserted,
            )
        return inserted

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provide a session wrapped in one transaction.

        Commits when the block exits normally, rolls back on any error.
        """
        if self._session_factory is None:
            raise RuntimeError("Database is not open")

        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def close(self) -> None:
        """Dispose of the engine. Safe to call more than once."""
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Database closed")
        self._engine = None
        self._session_factory = None
