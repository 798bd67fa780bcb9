"""
Filtered full-text search over the item index.

Conjoins the compiled text predicate with optional workspace, item type
and tag constraints into one parameterized statement.
"""

import logging
from typing import TYPE_CHECKING, Iterable, List, Optional, Union

from kbase.core.models import ItemType, Rank, SearchResult
from ..constants import BM25_WEIGHTS, DEFAULT_SEARCH_LIMIT
from .compiler import compile_text_query, is_universal
from .predicate import Fragment, StatementBuilder
from .results import RESULT_COLUMNS, run_search
from .tags import TagMatchMode, tag_membership_condition

if TYPE_CHECKING:
    from ..connection import DatabaseConnection

logger = logging.getLogger(__name__)


def _bm25_call() -> str:
    """bm25() with per-column weights; FTS5 scores are lower-is-better."""
    return f"bm25(items_fts, {', '.join(str(w) for w in BM25_WEIGHTS)})"


def build_search_statement(
    text_query: Optional[str] = None,
    workspace_id: Optional[str] = None,
    item_type: Optional[Union[ItemType, str]] = None,
    tags: Optional[Iterable[str]] = None,
    limit: int = DEFAULT_SEARCH_LIMIT,
) -> StatementBuilder:
    """
    Assemble the search statement without executing it.

    Returns
    -------
    StatementBuilder
        Builder whose WHERE conditions are, in order: text match,
        workspace, item type, tag membership (each only when present)
    """
    predicate = compile_text_query(text_query or "")

    if is_universal(predicate):
        # No text constraint: every item is a candidate, newest first
        builder = StatementBuilder(f"SELECT {RESULT_COLUMNS}\nFROM items i")
        order_clause = "i.updated_at DESC, i.id"
    else:
        # Negate bm25 so that higher scores are better
        builder = (
            StatementBuilder(
                f"SELECT {RESULT_COLUMNS},\n    -{_bm25_call()} AS score\nFROM items_fts"
            )
            .join("INNER JOIN items i ON i.id = items_fts.item_id")
            .where(Fragment("items_fts MATCH ?", (predicate,)))
        )
        order_clause = "score DESC, i.updated_at DESC, i.id"

    if workspace_id:
        builder.where(Fragment("i.workspace_id = ?", (workspace_id,)))

    if item_type:
        builder.where(Fragment("i.item_type = ?", (ItemType(item_type).value,)))

    # Resolved per call; nothing is shared with other tag searches
    tag_condition = tag_membership_condition(tags or [], TagMatchMode.ALL)
    if tag_condition is not None:
        builder.where(tag_condition)

    return builder.order_by(order_clause).limit(limit)


def search_filtered(
    conn: "DatabaseConnection",
    text_query: Optional[str] = None,
    workspace_id: Optional[str] = None,
    item_type: Optional[Union[ItemType, str]] = None,
    tags: Optional[Iterable[str]] = None,
    limit: Optional[int] = None,
) -> List[SearchResult]:
    """
    Full-text search with optional scope and tag filters.

    Parameters
    ----------
    conn : DatabaseConnection
        Database connection
    text_query : str, optional
        Free-form query; tokens are prefix-matched and OR-ed. Empty or
        whitespace-only means no text constraint.
    workspace_id : str, optional
        Only return items from this workspace
    item_type : ItemType or str, optional
        Only return items of this type
    tags : Iterable[str], optional
        Only return items that have ALL of these tags
    limit : int, optional
        Maximum results (default 50), applied after ordering

    Returns
    -------
    List[SearchResult]
        Results ranked by relevance (text query) or recency (no text query)

    Raises
    ------
    BackendQueryError
        If the backing store rejects the statement
    ValueError
        If ``item_type`` is not a known item type
    """
    if limit is None:
        limit = DEFAULT_SEARCH_LIMIT
    if limit <= 0:
        return []

    builder = build_search_statement(text_query, workspace_id, item_type, tags, limit)
    statement = builder.build()

    if is_universal(compile_text_query(text_query or "")):
        def rank_of(row):
            return Rank.unranked()
    else:
        def rank_of(row):
            return Rank.relevance(row["score"])

    logger.debug(
        "Search %r with %d condition(s), limit %d",
        text_query,
        len(builder.conditions),
        limit,
    )
    return run_search(conn, statement, rank_of, "search")
