"""
Custom Exceptions.

Application errors raised by the service layer. Each class carries the
HTTP status and error code the API answers with, so the exception
handlers never need a lookup table.
"""

from typing import Any


class ApplicationError(Exception):
    """Base exception for all application errors."""

    status_code: int = 500
    code: str = "SYS_INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class NotFoundError(ApplicationError):
    """A category or note id that does not exist."""

    status_code = 404
    code = "RES_NOT_FOUND"

    def __init__(self, resource: str = "Resource", resource_id: str | None = None) -> None:
        self.resource = resource
        self.resource_id = resource_id
        details = {"id": resource_id} if resource_id is not None else None
        super().__init__(f"{resource} not found", details)


class ValidationError(ApplicationError):
    """Input that passed schema validation but breaks a business rule."""

    status_code = 400
    code = "VAL_VALIDATION_ERROR"

    def __init__(self, message: str = "Validation failed", details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details)


class DatabaseError(ApplicationError):
    """A storage failure. The driver message is logged, not exposed."""

    status_code = 500
    code = "SYS_DATABASE_ERROR"

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Database operation failed: {operation}")
