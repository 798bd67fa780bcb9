"""
FastAPI dependencies for shared resources.

Provides dependency injection for database connections.
"""

from typing import Generator

from kbase.core.config import get_default_db_path
from kbase.core.db import Database


def get_db() -> Generator[Database, None, None]:
    """
    Dependency that provides a database and ensures cleanup.

    Yields
    ------
    Database
        Database instance, closed once the request is done

    Notes
    -----
    One connection per request; WAL mode lets concurrent requests read
    while another writes.
    """
    db = Database(str(get_default_db_path()))
    try:
        yield db
    finally:
        db.close()
