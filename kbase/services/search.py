"""
Search service for querying the knowledge base.

Wraps the database search paths with the request-level defaults shared by
the REST API and the CLI:
- Limit defaults and clamping
- Tag name cleanup for comma-separated input
- Debug logging of each query
"""
import logging
from typing import Iterable, List, Optional, Union

from kbase.core.db import Database
from kbase.core.db.constants import (
    DEFAULT_SEARCH_LIMIT,
    DEFAULT_SIMILAR_LIMIT,
    MAX_SEARCH_LIMIT,
)
from kbase.core.models import ItemType, SearchResult

logger = logging.getLogger(__name__)


def split_tag_list(value: Optional[Union[str, Iterable[str]]]) -> List[str]:
    """
    Turn ``"a, b,c"`` or ``["a,b", "c"]`` into ``["a", "b", "c"]``.

    Blank entries are dropped; order is kept.
    """
    if value is None:
        return []
    parts = [value] if isinstance(value, str) else list(value)
    names = []
    for part in parts:
        names.extend(name.strip() for name in part.split(","))
    return [name for name in names if name]


def clamp_limit(limit: Optional[int], default: int) -> int:
    """Apply the default and the upper bound to a requested limit."""
    if limit is None:
        return default
    return max(0, min(limit, MAX_SEARCH_LIMIT))


class SearchService:
    """
    Provides search functionality over workspace items.

    Features:
    - search(): text query with workspace, type and tag facets
    - search_by_tags(): match-any / match-all tag search
    - find_similar(): items ranked by shared tags
    """

    def __init__(self, db: Database):
        """
        Initialize search service.

        Parameters
        ----------
        db : Database
            Database instance
        """
        self.db = db

    def search(
        self,
        query: Optional[str] = None,
        workspace_id: Optional[str] = None,
        item_type: Optional[Union[ItemType, str]] = None,
        tags: Optional[Union[str, Iterable[str]]] = None,
        limit: Optional[int] = None,
    ) -> List[SearchResult]:
        """
        Search items by text with optional facets.

        Parameters
        ----------
        query : str, optional
            Free-form text; empty means "all items, newest first"
        workspace_id : str, optional
            Restrict to one workspace
        item_type : ItemType or str, optional
            Restrict to one item type
        tags : str or Iterable[str], optional
            Required tags (all of them); comma-separated strings are split
        limit : int, optional
            Maximum results, capped at MAX_SEARCH_LIMIT

        Returns
        -------
        List[SearchResult]
            Matching items
        """
        limit = clamp_limit(limit, DEFAULT_SEARCH_LIMIT)
        tag_names = split_tag_list(tags)
        logger.debug(
            "search query=%r workspace=%s type=%s tags=%s limit=%d",
            query,
            workspace_id,
            item_type,
            tag_names,
            limit,
        )
        return self.db.search(query, workspace_id, item_type, tag_names, limit)

    def search_by_tags(
        self,
        workspace_id: Optional[str],
        tags: Union[str, Iterable[str]],
        match_all: bool = False,
    ) -> List[SearchResult]:
        """Find items carrying any (or all) of the given tags."""
        tag_names = split_tag_list(tags)
        logger.debug(
            "tag search tags=%s workspace=%s match_all=%s",
            tag_names,
            workspace_id,
            match_all,
        )
        return self.db.search_by_tags(workspace_id, tag_names, match_all)

    def find_similar(
        self, item_id: str, limit: Optional[int] = None
    ) -> List[SearchResult]:
        """Find items sharing tags with ``item_id``, most shared first."""
        return self.db.find_similar(item_id, clamp_limit(limit, DEFAULT_SIMILAR_LIMIT))
