"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching real databases.
"""

from datetime import datetime
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from notepad.backend.repositories.category import CategoryRecord
from notepad.backend.repositories.note import NoteRecord


# =============================================================================
# Database Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

    Provides a fully mocked AsyncSession with common methods.

    Usage:
        def test_service(mock_db_session: AsyncMock):
            service = NoteService(mock_db_session)
    """
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.execute = AsyncMock()
    session.add = MagicMock()
    return session


# =============================================================================
# Record Factories
# =============================================================================


CREATED_AT = datetime(2024, 1, 1, 12, 0, 0)


def make_category(**overrides: Any) -> CategoryRecord:
    """Build a CategoryRecord with sensible defaults."""
    values: dict[str, Any] = {
        "id": "cat-1",
        "name": "Work Notes",
        "color": "#3b82f6",
        "created_at": CREATED_AT,
    }
    values.update(overrides)
    return CategoryRecord(**values)


def make_note(**overrides: Any) -> NoteRecord:
    """Build a NoteRecord with sensible defaults."""
    values: dict[str, Any] = {
        "id": "note-1",
        "title": "Standup",
        "content": "<p>Agenda</p>",
        "category_id": "cat-1",
        "tags": ["daily"],
        "created_at": CREATED_AT,
        "updated_at": CREATED_AT,
    }
    values.update(overrides)
    return NoteRecord(**values)


@pytest.fixture
def category_factory():
    """Provide the CategoryRecord factory."""
    return make_category


@pytest.fixture
def note_factory():
    """Provide the NoteRecord factory."""
    return make_note


# =============================================================================
# Logging Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Mock logger for testing logging calls.

    Usage:
        def test_logging(mock_logger):
            with patch("module.get_logger", return_value=mock_logger):
                # Test code that logs
                mock_logger.info.assert_called_once()
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.exception = MagicMock()
    return logger
