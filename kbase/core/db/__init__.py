"""
Database module for the knowledge base.

Provides SQLite storage with an FTS5 item index, faceted search and
tag-overlap similarity using a repository pattern architecture.
"""

from typing import Iterable, List, Optional, Union

from kbase.core.models import ItemType, SearchResult
from .connection import DatabaseConnection
from .constants import DEFAULT_SIMILAR_LIMIT
from .errors import BackendQueryError, KnowledgeBaseError, NotFoundError
from .repositories.item import ItemRepository
from .repositories.tag import TagRepository
from .repositories.workspace import WorkspaceRepository
from .schema import SchemaManager
from .search.filtered import search_filtered
from .search.fts import FTSManager
from .search.similar import find_similar
from .search.tags import search_by_tags


class Database:
    """
    Main database facade combining all repositories and search paths.

    Example
    -------
    >>> db = Database()
    >>> ws = db.workspaces.create("Notes")
    >>> results = db.search("python", workspace_id=ws.id)
    """

    def __init__(self, db_path: Optional[str] = None):
        """
        Initialize database connection and repositories.

        Parameters
        ----------
        db_path : str, optional
            Path to database file. If None, uses default OS-specific location.
        """
        self.conn = DatabaseConnection(db_path)
        self._schema = SchemaManager(self.conn)
        self._schema.ensure()

        self.fts = FTSManager(self.conn)

        # Repositories
        self.workspaces = WorkspaceRepository(self.conn)
        self.items = ItemRepository(self.conn)
        self.tags = TagRepository(self.conn)

    def close(self):
        """Close the database connection."""
        self.conn.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, *args):
        """Context manager exit."""
        self.close()

    # --- Search ---
    def search(
        self,
        text_query: Optional[str] = None,
        workspace_id: Optional[str] = None,
        item_type: Optional[Union[ItemType, str]] = None,
        tags: Optional[Iterable[str]] = None,
        limit: Optional[int] = None,
    ) -> List[SearchResult]:
        """Delegate to search_filtered()."""
        return search_filtered(
            self.conn, text_query, workspace_id, item_type, tags, limit
        )

    def search_by_tags(
        self,
        workspace_id: Optional[str],
        tag_names: Iterable[str],
        match_all: bool = False,
    ) -> List[SearchResult]:
        """Delegate to search_by_tags()."""
        return search_by_tags(self.conn, workspace_id, tag_names, match_all)

    def find_similar(
        self, item_id: str, limit: int = DEFAULT_SIMILAR_LIMIT
    ) -> List[SearchResult]:
        """Delegate to find_similar()."""
        return find_similar(self.conn, item_id, limit)

    def rebuild_search_index(self) -> int:
        """Delegate to FTSManager.rebuild_index()."""
        return self.fts.rebuild_index()


__all__ = [
    "Database",
    "DatabaseConnection",
    "BackendQueryError",
    "KnowledgeBaseError",
    "NotFoundError",
]
