"""
Tag-overlap similarity ranking.
"""

from typing import TYPE_CHECKING, List

from kbase.core.models import Rank, SearchResult
from ..constants import DEFAULT_SIMILAR_LIMIT
from .predicate import Fragment, StatementBuilder
from .results import RESULT_COLUMNS, run_search

if TYPE_CHECKING:
    from ..connection import DatabaseConnection


def find_similar(
    conn: "DatabaseConnection",
    item_id: str,
    limit: int = DEFAULT_SIMILAR_LIMIT,
) -> List[SearchResult]:
    """
    Rank other items by how many tags they share with a reference item.

    Items sharing no tag never appear, and neither does the reference item.
    Ties on the shared count go to the most recently updated item.

    Parameters
    ----------
    conn : DatabaseConnection
        Database connection
    item_id : str
        Reference item; an unknown or untagged item yields no results
    limit : int
        Maximum results to return

    Returns
    -------
    List[SearchResult]
        Results whose rank is the integer shared-tag count
    """
    if limit <= 0:
        return []

    statement = (
        StatementBuilder(
            f"SELECT {RESULT_COLUMNS},\n    COUNT(DISTINCT it.tag_id) AS shared\nFROM items i"
        )
        .join("INNER JOIN item_tags it ON i.id = it.item_id")
        .where(
            Fragment(
                "it.tag_id IN (SELECT tag_id FROM item_tags WHERE item_id = ?)",
                (item_id,),
            )
        )
        .where(Fragment("i.id != ?", (item_id,)))
        .group_by("i.id")
        .order_by("shared DESC, i.updated_at DESC, i.id")
        .limit(limit)
        .build()
    )

    return run_search(
        conn, statement, lambda row: Rank.overlap(row["shared"]), "similarity"
    )
