"""
Shared execution and row mapping for the search paths.
"""

import logging
import sqlite3
from typing import TYPE_CHECKING, Callable, List

from kbase.core.models import Rank, SearchResult
from ..errors import BackendQueryError
from .predicate import Fragment

if TYPE_CHECKING:
    from ..connection import DatabaseConnection

logger = logging.getLogger(__name__)

# Item columns every search path selects, in SearchResult field order
RESULT_COLUMNS = """
    i.id,
    i.workspace_id,
    i.item_type,
    i.title,
    i.content,
    i.file_path,
    i.created_at,
    i.updated_at"""


def row_to_result(row: sqlite3.Row, rank: Rank) -> SearchResult:
    """Project an item row onto a SearchResult."""
    return SearchResult(
        id=row["id"],
        workspace_id=row["workspace_id"],
        item_type=row["item_type"],
        title=row["title"] or "",
        content=row["content"],
        file_path=row["file_path"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        rank=rank,
    )


def run_search(
    conn: "DatabaseConnection",
    statement: Fragment,
    rank_of: Callable[[sqlite3.Row], Rank],
    label: str,
) -> List[SearchResult]:
    """
    Execute a search statement and map every row to a result.

    Parameters
    ----------
    conn : DatabaseConnection
        Database connection
    statement : Fragment
        Fully built statement with its bound parameters
    rank_of : Callable
        Builds the Rank for a row
    label : str
        Search path name, used in log messages

    Returns
    -------
    List[SearchResult]
        All rows, in statement order

    Raises
    ------
    BackendQueryError
        If SQLite rejects the statement. Nothing is retried.
    """
    cursor = conn.cursor()
    try:
        cursor.execute(statement.sql, statement.params)
        rows = cursor.fetchall()
    except sqlite3.Error as e:
        logger.warning("%s query failed: %s", label, e)
        raise BackendQueryError(str(e), sql=statement.sql) from e

    logger.debug("%s query returned %d rows", label, len(rows))
    return [row_to_result(row, rank_of(row)) for row in rows]
