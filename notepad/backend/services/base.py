"""
Base Service.

Shared plumbing for CategoryService and NoteService: the session they
work in, repository-result checks, and translation of SQLAlchemy
failures into application errors.

Repositories report a missing row as None (get/update) or False
(delete). Services turn that into NotFoundError with _require_found:

    category = await self._execute_db_operation(
        "update_category",
        self.repo.update_category(category_id, changes),
    )
    return self._require_found(category, "Category", category_id)
"""

from collections.abc import Awaitable
from typing import Any, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notepad.backend.core.exceptions import DatabaseError, NotFoundError, ValidationError
from notepad.backend.core.logging import get_logger

T = TypeVar("T")


class BaseService:
    """Base class for services bound to one request session."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._logger = get_logger(self.__class__.__module__)

    @property
    def session(self) -> AsyncSession:
        """Session (and transaction) shared by this service's repositories."""
        return self._session

    @staticmethod
    def _require_found(result: T | None, resource: str, resource_id: str) -> T:
        """
        Return a repository result, or raise if it reports a missing row.

        Raises:
            NotFoundError: If result is None or False
        """
        if result is None or result is False:
            raise NotFoundError(resource, resource_id)
        return result

    async def _execute_db_operation(self, operation: str, coro: Awaitable[T]) -> T:
        """
        Await a repository call, translating SQLAlchemy errors.

        Args:
            operation: Name of the operation, used in logs and error messages
            coro: Repository coroutine to await

        Raises:
            ValidationError: For constraint violations (e.g. a dangling category id)
            DatabaseError: For any other database failure
        """
        try:
            return await coro
        except IntegrityError as e:
            self._logger.warning(
                "Database constraint violated",
                extra={"operation": operation, "error": str(e.orig)},
            )
            raise ValidationError(
                "Database constraint violation",
                details={"operation": operation},
            ) from e
        except SQLAlchemyError as e:
            self._logger.error(
                "Database operation failed",
                extra={"operation": operation, "error": str(e)},
            )
            raise DatabaseError(operation) from e

    def _log_operation(self, operation: str, **context: Any) -> None:
        """Log a write (create/update/delete) at INFO."""
        self._logger.info(operation, extra={"service": self.__class__.__name__, **context})

    def _log_debug(self, message: str, **context: Any) -> None:
        """Log a read at DEBUG."""
        self._logger.debug(message, extra={"service": self.__class__.__name__, **context})
