"""
Unit Tests for Request Context Middleware.

Tests the RequestContextMiddleware functionality including:
- Request ID generation and propagation
- Source extraction from X-Frontend-ID header
- Response timing headers
- Structlog context binding
"""

import pytest
from unittest.mock import MagicMock, patch

from starlette.requests import Request
from starlette.responses import Response

from notepad.backend.core.middleware import RequestContextMiddleware, resolve_source


@pytest.fixture
def middleware():
    return RequestContextMiddleware(MagicMock())


@pytest.fixture
def mock_request():
    request = MagicMock(spec=Request)
    request.headers = {}
    request.method = "GET"
    request.url = MagicMock()
    request.url.path = "/api/notes"
    request.client = MagicMock()
    request.client.host = "127.0.0.1"
    request.state = MagicMock()
    return request


@pytest.fixture
def structlog_ctx():
    with patch("notepad.backend.core.middleware.structlog.contextvars") as mock_ctx:
        yield mock_ctx


async def _ok(request):
    return Response(content="OK", status_code=200)


class TestResolveSource:
    """Tests for mapping X-Frontend-ID onto a log source."""

    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            ("web", "web"),
            ("cli", "cli"),
            ("api", "api"),
            ("WEB", "web"),
            (" cli ", "cli"),
            ("custom-client", "unknown"),
            ("", "unknown"),
            (None, "unknown"),
        ],
    )
    def test_resolve(self, header, expected):
        assert resolve_source(header) == expected


class TestRequestState:
    """Values handed to route handlers through request.state."""

    @pytest.mark.asyncio
    async def test_source_is_set_before_handler_runs(self, middleware, mock_request, structlog_ctx):
        mock_request.headers = {"X-Frontend-ID": "cli"}
        seen = {}

        async def call_next(request):
            seen["source"] = request.state.source
            return Response(status_code=204)

        await middleware.dispatch(mock_request, call_next)

        assert seen == {"source": "cli"}

    @pytest.mark.asyncio
    async def test_generates_request_id_when_not_provided(self, middleware, mock_request, structlog_ctx):
        response = await middleware.dispatch(mock_request, _ok)

        assert len(mock_request.state.request_id) == 36
        assert response.headers["X-Request-ID"] == mock_request.state.request_id

    @pytest.mark.asyncio
    async def test_uses_provided_request_id(self, middleware, mock_request, structlog_ctx):
        mock_request.headers = {"X-Request-ID": "custom-request-id-123"}

        response = await middleware.dispatch(mock_request, _ok)

        assert mock_request.state.request_id == "custom-request-id-123"
        assert response.headers["X-Request-ID"] == "custom-request-id-123"


class TestResponseHeaders:
    """Tests for headers added to the outgoing response."""

    @pytest.mark.asyncio
    async def test_adds_response_time_header(self, middleware, mock_request, structlog_ctx):
        with patch("notepad.backend.core.middleware._elapsed_ms", return_value=42):
            response = await middleware.dispatch(mock_request, _ok)

        assert response.headers["X-Response-Time"] == "42ms"

    @pytest.mark.asyncio
    async def test_frontend_id_is_not_echoed(self, middleware, mock_request, structlog_ctx):
        mock_request.headers = {"X-Frontend-ID": "web"}

        response = await middleware.dispatch(mock_request, _ok)

        assert "X-Frontend-ID" not in response.headers


class TestStructlogContext:
    """Tests for binding and clearing structlog context vars."""

    @pytest.mark.asyncio
    async def test_binds_context(self, middleware, mock_request, structlog_ctx):
        mock_request.headers = {"X-Frontend-ID": "web"}

        await middleware.dispatch(mock_request, _ok)

        structlog_ctx.bind_contextvars.assert_called_once()
        call_kwargs = structlog_ctx.bind_contextvars.call_args.kwargs
        assert call_kwargs["source"] == "web"
        assert call_kwargs["method"] == "GET"
        assert call_kwargs["path"] == "/api/notes"
        assert call_kwargs["request_id"] == mock_request.state.request_id

    @pytest.mark.asyncio
    async def test_unknown_source_is_bound(self, middleware, mock_request, structlog_ctx):
        await middleware.dispatch(mock_request, _ok)

        assert structlog_ctx.bind_contextvars.call_args.kwargs["source"] == "unknown"

    @pytest.mark.asyncio
    async def test_clears_before_and_after(self, middleware, mock_request, structlog_ctx):
        await middleware.dispatch(mock_request, _ok)

        assert structlog_ctx.clear_contextvars.call_count == 2

    @pytest.mark.asyncio
    async def test_clears_and_reraises_on_exception(self, middleware, mock_request, structlog_ctx):
        async def call_next(request):
            raise RuntimeError("Something went wrong")

        with patch("notepad.backend.core.middleware.logger") as mock_logger:
            with pytest.raises(RuntimeError, match="Something went wrong"):
                await middleware.dispatch(mock_request, call_next)

        assert structlog_ctx.clear_contextvars.call_count == 2
        assert mock_logger.error.call_args.kwargs["extra"]["error_type"] == "RuntimeError"


class TestCompletionLogging:
    """Tests for the per-request completion log line."""

    @pytest.mark.asyncio
    async def test_logged_at_debug_by_default(self, middleware, mock_request, structlog_ctx):
        with patch("notepad.backend.core.middleware.logger") as mock_logger:
            await middleware.dispatch(mock_request, _ok)

        assert mock_logger.debug.call_args.args[0] == "Request completed"
        mock_logger.info.assert_not_called()

    @pytest.mark.asyncio
    async def test_logged_at_info_when_enabled(self, mock_request, structlog_ctx):
        middleware = RequestContextMiddleware(MagicMock(), log_requests=True)

        async def call_next(request):
            return Response(content="{}", status_code=201)

        with patch("notepad.backend.core.middleware.logger") as mock_logger:
            await middleware.dispatch(mock_request, call_next)

        extra = mock_logger.info.call_args.kwargs["extra"]
        assert extra["status_code"] == 201
        assert extra["client_host"] == "127.0.0.1"

    @pytest.mark.asyncio
    async def test_handles_missing_client(self, middleware, mock_request, structlog_ctx):
        mock_request.client = None

        with patch("notepad.backend.core.middleware.logger") as mock_logger:
            response = await middleware.dispatch(mock_request, _ok)

        assert response.status_code == 200
        assert mock_logger.debug.call_args.kwargs["extra"]["client_host"] is None
