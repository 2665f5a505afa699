"""
HTTP Client for CLI.

Provides async HTTP client for communicating with the notepad API.
All requests include X-Frontend-ID: cli header for log routing.
"""

from typing import Any

import httpx

from notepad.backend.core.config import get_server_base_url
from notepad.backend.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


class APIError(Exception):
    """Non-2xx response from the backend."""

    def __init__(
        self,
        status_code: int,
        message: str,
        code: str | None = None,
        payload: Any = None,
    ):
        self.status_code = status_code
        self.message = message
        self.code = code
        self.payload = payload
        super().__init__(f"{status_code}: {message}")


def _error_from_response(response: httpx.Response) -> APIError:
    """Build an APIError from the backend's error envelope, if there is one."""
    message = response.reason_phrase or "Request failed"
    code = None
    try:
        body = response.json()
    except ValueError:
        return APIError(response.status_code, message)

    if isinstance(body, dict):
        error = body.get("error")
        detail = body.get("detail")
        if isinstance(error, dict):
            message = error.get("message", message)
            code = error.get("code")
        elif isinstance(detail, str):
            message = detail
    return APIError(response.status_code, message, code, payload=body)


class APIClient:
    """
    HTTP client for notepad API communication.

    Features:
    - Automatic base URL from settings
    - X-Frontend-ID header for log routing
    - Structured logging of requests/responses
    - Typed category and note operations raising APIError on failure

    Usage:
        client = APIClient()
        categories = await client.list_categories()
        note = await client.create_note(title="T", category_id=categories[0]["id"])
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: Backend base URL. If None, reads from config/settings/application.yaml.
            timeout: Request timeout in seconds. If None, reads from config/settings/application.yaml.
            transport: Optional httpx transport (used by tests to talk to an app in-process).
        """
        try:
            config_base_url, config_timeout = get_server_base_url()
        except Exception as e:
            if base_url is None:
                raise RuntimeError(
                    "Could not determine server URL from config/settings/application.yaml"
                ) from e
            config_base_url = base_url
            config_timeout = timeout if timeout is not None else 30.0

        self.base_url = (base_url or config_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else config_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"X-Frontend-ID": "cli"},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Make an HTTP request to the backend.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: API path (e.g., /health, /api/notes)
            **kwargs: Additional arguments for httpx

        Returns:
            httpx.Response

        Raises:
            httpx.HTTPError: On transport failure
        """
        client = await self._get_client()

        log_with_source(
            logger,
            "cli",
            "debug",
            "API request",
            method=method,
            path=path,
        )

        try:
            response = await client.request(method, path, **kwargs)

            log_with_source(
                logger,
                "cli",
                "debug",
                "API response",
                method=method,
                path=path,
                status_code=response.status_code,
            )

            return response

        except httpx.HTTPError as e:
            log_with_source(
                logger,
                "cli",
                "error",
                "API request failed",
                method=method,
                path=path,
                error=str(e),
            )
            raise

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a POST request."""
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a PUT request."""
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a DELETE request."""
        return await self.request("DELETE", path, **kwargs)

    async def _call(self, method: str, path: str, **kwargs: Any) -> Any:
        """Make a request and return the decoded body, raising APIError on non-2xx."""
        response = await self.request(method, path, **kwargs)
        if response.is_error:
            raise _error_from_response(response)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # Categories

    async def list_categories(self) -> list[dict[str, Any]]:
        return await self._call("GET", "/api/categories")

    async def create_category(self, name: str, color: str | None = None) -> dict[str, Any]:
        payload: dict[str, Any] = {"name": name}
        if color is not None:
            payload["color"] = color
        return await self._call("POST", "/api/categories", json=payload)

    async def update_category(
        self,
        category_id: str,
        name: str | None = None,
        color: str | None = None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if name is not None:
            payload["name"] = name
        if color is not None:
            payload["color"] = color
        return await self._call("PUT", f"/api/categories/{category_id}", json=payload)

    async def delete_category(self, category_id: str) -> None:
        await self._call("DELETE", f"/api/categories/{category_id}")

    # Notes

    async def list_notes(
        self,
        category_id: str | None = None,
        search: str | None = None,
    ) -> list[dict[str, Any]]:
        params: dict[str, str] = {}
        if category_id:
            params["categoryId"] = category_id
        if search:
            params["search"] = search
        return await self._call("GET", "/api/notes", params=params)

    async def get_note(self, note_id: str) -> dict[str, Any]:
        return await self._call("GET", f"/api/notes/{note_id}")

    async def create_note(
        self,
        title: str,
        category_id: str,
        content: str | None = None,
        tags: list[str] | None = None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"title": title, "categoryId": category_id}
        if content is not None:
            payload["content"] = content
        if tags is not None:
            payload["tags"] = tags
        return await self._call("POST", "/api/notes", json=payload)

    async def update_note(self, note_id: str, **changes: Any) -> dict[str, Any]:
        """
        Update a note with only the given fields.

        Keyword names follow the Python side (title, content, category_id, tags);
        None values are dropped so they are not sent as explicit nulls.
        """
        field_names = {"title": "title", "content": "content", "category_id": "categoryId", "tags": "tags"}
        unknown = set(changes) - set(field_names)
        if unknown:
            raise TypeError(f"Unknown note fields: {', '.join(sorted(unknown))}")
        payload = {
            field_names[key]: value
            for key, value in changes.items()
            if value is not None
        }
        return await self._call("PUT", f"/api/notes/{note_id}", json=payload)

    async def delete_note(self, note_id: str) -> None:
        await self._call("DELETE", f"/api/notes/{note_id}")

    # Health

    async def health(self) -> dict[str, Any]:
        return await self._call("GET", "/health")

    async def readiness(self) -> dict[str, Any]:
        return await self._call("GET", "/health/ready")


# Module-level client instance
_client: APIClient | None = None


def get_api_client() -> APIClient:
    """Get or create the API client singleton."""
    global _client
    if _client is None:
        _client = APIClient()
    return _client


async def close_api_client() -> None:
    """Close the API client."""
    global _client
    if _client:
        await _client.close()
        _client = None
