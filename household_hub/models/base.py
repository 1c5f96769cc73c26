"""Declarative base and shared column helpers."""

import uuid
from datetime import datetime, UTC

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def generate_id() -> str:
    """Default primary key: 32 hex chars. Restores pin their own ids."""
    return uuid.uuid4().hex


def utcnow() -> datetime:
    """Naive UTC timestamp, microsecond precision on every backend"""
    return datetime.now(UTC).replace(tzinfo=None)


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    """created_at / updated_at set by the application on insert / update"""

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )
