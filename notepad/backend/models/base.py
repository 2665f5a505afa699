"""
SQLAlchemy Base Model.

Base class for all database models with common fields and utilities.
Timestamps are stored as integer epoch seconds and surface in Python
as timezone-naive UTC datetimes.
"""

from datetime import datetime
from typing import Any
from uuid import uuid4

from sqlalchemy import Integer
from sqlalchemy.engine import Dialect
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from notepad.backend.core.utils import from_epoch_seconds, to_epoch_seconds, utc_now_seconds


class EpochSeconds(TypeDecorator):
    """Datetime column persisted as INTEGER seconds since the Unix epoch."""

    impl = Integer
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> int | None:
        if value is None:
            return None
        return to_epoch_seconds(value)

    def process_result_value(self, value: Any, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        return from_epoch_seconds(value)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class CreatedAtMixin:
    """Mixin that adds a created_at timestamp, set once on insert."""

    created_at: Mapped[datetime] = mapped_column(
        EpochSeconds,
        default=utc_now_seconds,
        nullable=False,
    )


class TimestampMixin(CreatedAtMixin):
    """Mixin that adds created_at and updated_at timestamps."""

    updated_at: Mapped[datetime] = mapped_column(
        EpochSeconds,
        default=utc_now_seconds,
        nullable=False,
    )


class UUIDMixin:
    """Mixin that adds a UUID primary key."""

    id: Mapped[str] = mapped_column(
        primary_key=True,
        default=lambda: str(uuid4()),
    )
