"""
Integration Test Fixtures.

Fixtures for integration tests - uses a real in-memory database and
the full application stack (middleware, exception handlers, routers).
"""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from notepad.backend.core.database import Database
from notepad.backend.main import create_app

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    """
    Provide an open, empty in-memory Database.

    Default categories are not seeded so each test controls its data.
    """
    db = Database(TEST_DATABASE_URL)
    await db.open(seed_defaults=False)

    yield db

    await db.close()


@pytest.fixture
def app(database: Database) -> FastAPI:
    """Application serving from the test database."""
    return create_app(database=database)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client bound to the application.

    Every request runs in its own session and transaction, exactly as
    in production; the lifespan is not run because the database is
    already open.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client


# =============================================================================
# API Response Assertion Helpers
# =============================================================================


class ApiAssertions:
    """Helper class for API response assertions."""

    @staticmethod
    def assert_success(response: Any, expected_status: int = 200) -> Any:
        """
        Assert API response is successful.

        Args:
            response: httpx Response object
            expected_status: Expected HTTP status code

        Returns:
            Response JSON body (bare object or array)
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        return response.json()

    @staticmethod
    def assert_error(
        response: Any,
        expected_status: int,
        expected_code: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert API response is an error envelope.

        Args:
            response: httpx Response object
            expected_status: Expected HTTP status code
            expected_code: Expected error code (optional)

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is False, f"Response should be error: {data}"
        assert data.get("error") is not None, f"Missing error details: {data}"

        if expected_code:
            actual_code = data["error"].get("code")
            assert actual_code == expected_code, (
                f"Expected error code {expected_code}, got {actual_code}"
            )

        return data

    @staticmethod
    def assert_validation_error(
        response: Any,
        field: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert API response is a request validation error (400).

        Args:
            response: httpx Response object
            field: Expected field with validation error (optional)

        Returns:
            Response JSON data
        """
        data = ApiAssertions.assert_error(response, 400, "VAL_REQUEST_INVALID")

        if field:
            errors = data["error"].get("details", {}).get("validation_errors", [])
            fields = [e.get("field", "") for e in errors]
            assert any(field in f for f in fields), (
                f"Expected validation error for field '{field}', "
                f"got errors for: {fields}"
            )

        return data


@pytest.fixture
def api() -> ApiAssertions:
    """Provide API assertion helpers."""
    return ApiAssertions()


# =============================================================================
# Data Helpers
# =============================================================================


@pytest.fixture
def create_category(client: AsyncClient):
    """Create a category through the API and return its JSON."""

    async def _create(name: str = "Work Notes", color: str | None = None) -> dict[str, Any]:
        payload: dict[str, Any] = {"name": name}
        if color is not None:
            payload["color"] = color
        response = await client.post("/api/categories", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_note(client: AsyncClient):
    """Create a note through the API and return its JSON."""

    async def _create(category_id: str, title: str = "Note", **fields: Any) -> dict[str, Any]:
        response = await client.post(
            "/api/notes",
            json={"title": title, "categoryId": category_id, **fields},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create
