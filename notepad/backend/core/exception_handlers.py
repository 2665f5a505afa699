"""
Exception Handlers.

Turn errors raised while serving a category or note request into the
error envelope:

    {"success": false, "data": null,
     "error": {"code", "message", "details"},
     "metadata": {"timestamp", "request_id"}}

Successful responses are never wrapped; only failures use the envelope.

Usage:
    from notepad.backend.core.exception_handlers import register_exception_handlers

    register_exception_handlers(app)
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from notepad.backend.core.exceptions import ApplicationError
from notepad.backend.core.logging import get_logger
from notepad.backend.schemas.base import ErrorDetail, ErrorResponse, ResponseMetadata

logger = get_logger(__name__)

# Location prefixes FastAPI puts in front of a field path
_REQUEST_LOCATIONS = frozenset({"body", "query", "path", "header"})


def _get_request_id(request: Request) -> str | None:
    """Request id set by RequestContextMiddleware, else the raw header."""
    request_id = getattr(request.state, "request_id", None)
    if request_id is not None:
        return request_id
    return request.headers.get("x-request-id")


def error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Build an enveloped error response for the current request."""
    body = ErrorResponse(
        error=ErrorDetail(code=code, message=message, details=details or None),
        metadata=ResponseMetadata(request_id=_get_request_id(request)),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _field_name(loc: tuple[Any, ...] | list[Any]) -> tuple[str, str | None]:
    """Split a pydantic error location into (field path, request location)."""
    parts = [str(part) for part in loc]
    location = None
    if parts and parts[0] in _REQUEST_LOCATIONS:
        location = parts.pop(0)
    return ".".join(parts) or "body", location


async def application_error_handler(
    request: Request,
    exc: ApplicationError,
) -> JSONResponse:
    """NotFoundError, ValidationError, DatabaseError and friends."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "Server error" if exc.status_code >= 500 else "Client error",
        extra={
            "code": exc.code,
            "error_message": exc.message,
            "status": exc.status_code,
            "path": request.url.path,
            "method": request.method,
        },
    )
    return error_response(request, exc.status_code, exc.code, exc.message, exc.details)


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Handle request bodies and query strings that fail schema validation.

    Answers 400 (not FastAPI's 422) with one entry per offending field,
    named the way the client sent it (e.g. ``categoryId``, ``tags.0``).
    """
    validation_errors = []
    for err in exc.errors():
        field, location = _field_name(err.get("loc", ()))
        validation_errors.append({
            "field": field,
            "location": location,
            "message": err.get("msg", "Validation error"),
            "type": err.get("type", "unknown"),
        })

    logger.warning(
        "Request validation failed",
        extra={
            "path": request.url.path,
            "method": request.method,
            "fields": [e["field"] for e in validation_errors],
        },
    )
    return error_response(
        request,
        400,
        "VAL_REQUEST_INVALID",
        "Request validation failed",
        {"validation_errors": validation_errors},
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Anything else is a 500; the traceback goes to the log only."""
    logger.exception(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
        },
    )
    return error_response(request, 500, "SYS_INTERNAL_ERROR", "An unexpected error occurred")


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers above on the application."""
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
