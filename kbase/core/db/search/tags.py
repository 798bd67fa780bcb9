"""
Tag-set matching with "match any" and "match all" semantics.
"""

import logging
import sqlite3
from enum import Enum
from typing import TYPE_CHECKING, Iterable, List, Optional, Set

from kbase.core.models import Rank, SearchResult
from ..errors import BackendQueryError
from .predicate import Fragment, StatementBuilder, in_list
from .results import RESULT_COLUMNS, run_search

if TYPE_CHECKING:
    from ..connection import DatabaseConnection

logger = logging.getLogger(__name__)


class TagMatchMode(str, Enum):
    """How a multi-tag filter is applied."""

    ANY = "any"  # at least one of the tags
    ALL = "all"  # every one of the tags

    @classmethod
    def from_flag(cls, match_all: bool) -> "TagMatchMode":
        return cls.ALL if match_all else cls.ANY


def normalize_tag_names(tag_names: Optional[Iterable[str]]) -> List[str]:
    """De-duplicate tag names, keeping first-seen order and dropping blanks."""
    seen: Set[str] = set()
    names: List[str] = []
    for name in tag_names or []:
        name = name.strip()
        if name and name not in seen:
            seen.add(name)
            names.append(name)
    return names


def _tag_match_builder(
    tag_names: List[str], mode: TagMatchMode
) -> StatementBuilder:
    """
    Item ids whose tags satisfy ``mode`` over ``tag_names``.

    For ALL the number of distinct matched tag ids must equal the number of
    distinct requested names. Names with no tag row can never be counted,
    so an unknown name makes ALL match nothing and ANY ignore it.
    """
    builder = (
        StatementBuilder("SELECT it.item_id FROM item_tags it")
        .join("INNER JOIN tags t ON it.tag_id = t.id")
        .where(in_list("t.name", tag_names))
        .group_by("it.item_id")
    )
    if mode is TagMatchMode.ALL:
        builder.having(Fragment("COUNT(DISTINCT t.id) = ?", (len(tag_names),)))
    return builder


def tag_membership_condition(
    tag_names: Iterable[str],
    mode: TagMatchMode = TagMatchMode.ALL,
    column: str = "i.id",
) -> Optional[Fragment]:
    """
    Build ``<column> IN (<tag match subquery>)`` for the filter composer.

    Returns None when no usable tag names are given, meaning no tag
    constraint applies.
    """
    names = normalize_tag_names(tag_names)
    if not names:
        return None
    subquery = _tag_match_builder(names, mode).build()
    return Fragment.wrap(f"{column} IN (", subquery, ")")


def match_tags(
    conn: "DatabaseConnection",
    tag_names: Iterable[str],
    mode: TagMatchMode,
    candidates: Optional[Iterable[str]] = None,
) -> Set[str]:
    """
    Return the ids of items matching a tag set.

    Parameters
    ----------
    conn : DatabaseConnection
        Database connection
    tag_names : Iterable[str]
        Tag names to match; empty input matches nothing
    mode : TagMatchMode
        ANY or ALL semantics
    candidates : Iterable[str], optional
        Restrict matching to these item ids

    Returns
    -------
    Set[str]
        Matching item ids
    """
    names = normalize_tag_names(tag_names)
    if not names:
        return set()

    builder = _tag_match_builder(names, mode)
    if candidates is not None:
        candidate_ids = list(dict.fromkeys(candidates))
        if not candidate_ids:
            return set()
        builder.where(in_list("it.item_id", candidate_ids))

    statement = builder.build()
    cursor = conn.cursor()
    try:
        cursor.execute(statement.sql, statement.params)
    except sqlite3.Error as e:
        logger.warning("Tag match query failed for %s: %s", names, e)
        raise BackendQueryError(str(e), sql=statement.sql) from e
    return {row[0] for row in cursor.fetchall()}


def search_by_tags(
    conn: "DatabaseConnection",
    workspace_id: Optional[str],
    tag_names: Iterable[str],
    match_all: bool,
) -> List[SearchResult]:
    """
    Find items by tags, newest first.

    Parameters
    ----------
    conn : DatabaseConnection
        Database connection
    workspace_id : str, optional
        Only return items from this workspace
    tag_names : Iterable[str]
        Tag names to match; empty input returns no results
    match_all : bool
        Require every tag (True) or any tag (False)

    Returns
    -------
    List[SearchResult]
        Matching items ordered by ``updated_at`` descending, each carrying
        a constant tag-match rank
    """
    names = normalize_tag_names(tag_names)
    if not names:
        return []

    builder = (
        StatementBuilder(f"SELECT {RESULT_COLUMNS}\nFROM items i")
        .join("INNER JOIN item_tags it ON i.id = it.item_id")
        .join("INNER JOIN tags t ON it.tag_id = t.id")
        .where(in_list("t.name", names))
    )
    if workspace_id:
        builder.where(Fragment("i.workspace_id = ?", (workspace_id,)))

    builder.group_by("i.id")
    if TagMatchMode.from_flag(match_all) is TagMatchMode.ALL:
        builder.having(Fragment("COUNT(DISTINCT t.id) = ?", (len(names),)))
    builder.order_by("i.updated_at DESC, i.id")

    return run_search(conn, builder.build(), lambda row: Rank.tag_match(), "tag search")
