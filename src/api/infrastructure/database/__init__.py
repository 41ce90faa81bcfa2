"""Database infrastructure: declarative base, engine and session lifecycle."""

from infrastructure.database.dependencies import (
    close_database_connections,
    get_session,
)
from infrastructure.database.models import Base, TimestampMixin

__all__ = [
    "Base",
    "TimestampMixin",
    "close_database_connections",
    "get_session",
]
