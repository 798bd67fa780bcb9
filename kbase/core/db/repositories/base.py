"""
Base repository class providing common database operations.
"""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..connection import DatabaseConnection


def new_id() -> str:
    """Generate a fresh row id."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_timestamp(value: datetime) -> str:
    """Format a datetime as a UTC ISO-8601 string for storage."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def next_timestamp(previous: Optional[str]) -> str:
    """
    Timestamp for an update that never moves ``updated_at`` backwards.

    ISO strings in UTC sort chronologically, so the later of ``now`` and
    ``previous`` wins.
    """
    now = to_timestamp(utc_now())
    if previous and previous > now:
        return previous
    return now


class BaseRepository:
    """
    Base class for all repository implementations.

    Provides common database access patterns and utilities.
    """

    def __init__(self, conn: "DatabaseConnection"):
        """
        Initialize repository with database connection.

        Parameters
        ----------
        conn : DatabaseConnection
            Database connection to use for operations.
        """
        self._conn = conn

    def cursor(self):
        """Get a new cursor for database operations."""
        return self._conn.cursor()

    def transaction(self):
        """Run the enclosed statements atomically; see DatabaseConnection.transaction."""
        return self._conn.transaction()
