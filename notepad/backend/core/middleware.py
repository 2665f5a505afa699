"""
Request Context Middleware.

Tags every API request with an id and a caller source, times it, and
makes both visible to logs (structlog context vars), to handlers
(request.state) and to the caller (response headers):

    X-Request-ID     echoed back, or a fresh UUID4 when the caller sent none
    X-Frontend-ID    caller kind (web editor, cli, ...); read, never echoed
    X-Response-Time  wall time spent inside the app, e.g. "3ms"
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from notepad.backend.core.logging import VALID_SOURCES, get_logger

logger = get_logger(__name__)


def resolve_source(header_value: str | None) -> str:
    """Map an X-Frontend-ID value onto a known log source."""
    source = (header_value or "").strip().lower()
    return source if source in VALID_SOURCES else "unknown"


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Bind request_id/source/method/path for the duration of one request.

    Handlers can read request.state.request_id and request.state.source.
    Completion is logged at DEBUG, or at INFO when log_requests is set
    (features.yaml: api_request_logging).
    """

    def __init__(self, app: ASGIApp, log_requests: bool = False) -> None:
        super().__init__(app)
        self.log_requests = log_requests

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        source = resolve_source(request.headers.get("X-Frontend-ID"))
        request.state.request_id = request_id
        request.state.source = source

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            source=source,
            method=request.method,
            path=request.url.path,
        )
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Request failed with exception",
                extra={"duration_ms": _elapsed_ms(started), "error_type": type(exc).__name__},
            )
            raise
        else:
            duration_ms = _elapsed_ms(started)
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms}ms"

            log = logger.info if self.log_requests else logger.debug
            log(
                "Request completed",
                extra={
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                    "client_host": request.client.host if request.client else None,
                },
            )
            return response
        finally:
            structlog.contextvars.clear_contextvars()
