"""SQLAlchemy declarative base and shared model utilities.

Constraint names follow a fixed naming convention so repositories can map
an ``IntegrityError`` back to the uniqueness rule it violated.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, MetaData
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def _utc_now() -> datetime:
    """Named function so SQLAlchemy evaluates it per INSERT/UPDATE."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all ORM models, sharing one MetaData."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class TimestampMixin:
    """created_at / updated_at columns with UTC Python-side defaults."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=_utc_now,
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=_utc_now,
        onupdate=_utc_now,
        nullable=False,
    )


def violated_constraint(error: IntegrityError) -> str | None:
    """Return the name of the constraint an IntegrityError violated.

    asyncpg exposes ``constraint_name`` on the driver exception; other
    drivers only put it in the message, so callers fall back to matching
    on ``str(error)``.
    """
    orig = getattr(error, "orig", None)
    cause = getattr(orig, "__cause__", None)
    for candidate in (orig, cause):
        name = getattr(candidate, "constraint_name", None)
        if name:
            return str(name)
    return None


def violates(error: IntegrityError, constraint: str) -> bool:
    """Check whether an IntegrityError was raised by a named constraint."""
    return violated_constraint(error) == constraint or constraint in str(error)
