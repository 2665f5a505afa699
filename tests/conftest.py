"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Test Database Configuration:
    Tests use an in-memory SQLite database built by the same engine
    factory as the application (foreign keys on, single shared
    connection). Each test gets a fresh, empty database.
"""

from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
)

from notepad.backend.core.database import create_database_engine, create_schema

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# =============================================================================
# Database Engine Fixtures
# =============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    Create a test database engine with all tables.

    Scope is function: an in-memory database lives as long as its
    engine, so every test starts from an empty schema.
    """
    engine = create_database_engine(TEST_DATABASE_URL)
    await create_schema(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def db_session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to the test engine."""
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# =============================================================================
# Database Session Fixtures
# =============================================================================


@pytest.fixture
async def db_session(
    db_session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a database session for a single test.

    Changes are rolled back after the test; the engine is discarded
    anyway, so nothing leaks between tests.

    Usage:
        async def test_create_category(db_session: AsyncSession):
            repo = CategoryRepository(db_session)
            category = await repo.create_category("Work")
            assert category.color == "#3b82f6"
    """
    async with db_session_factory() as session:
        yield session
        await session.rollback()


# =============================================================================
# Utility Fixtures
# =============================================================================


@pytest.fixture
def anyio_backend() -> str:
    """Specify the async backend for anyio."""
    return "asyncio"
