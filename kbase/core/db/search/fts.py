"""
FTS5 index management for the item search index.

Each item has one row in ``items_fts`` holding its title, plain-text
content and a projection of its tag names. Title and content are kept
current by triggers on ``items``; the tag projection is recomputed here
whenever an item's tags change.
"""

import logging
import sqlite3
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

if TYPE_CHECKING:
    from ..connection import DatabaseConnection

logger = logging.getLogger(__name__)

_ITEM_TAG_NAMES_SQL = """
    SELECT t.name
    FROM tags t
    INNER JOIN item_tags it ON it.tag_id = t.id
    WHERE it.item_id = ?
    ORDER BY t.name
"""


def project_tag_names(names: Iterable[str]) -> str:
    """Space-join a set of tag names in name order."""
    return " ".join(sorted(set(names)))


def item_tag_projection(cursor: sqlite3.Cursor, item_id: str) -> str:
    """Compute the tag projection for an item from the association table."""
    cursor.execute(_ITEM_TAG_NAMES_SQL, (item_id,))
    return project_tag_names(row[0] for row in cursor.fetchall())


def sync_item_tags(cursor: sqlite3.Cursor, item_id: str) -> str:
    """
    Overwrite an item's tag projection with its current tag names.

    Runs on the caller's cursor and does not commit, so the caller can
    make it part of the same transaction as the association write.

    Returns
    -------
    str
        The projection that was written
    """
    tags = item_tag_projection(cursor, item_id)
    cursor.execute(
        "UPDATE items_fts SET tags = ? WHERE item_id = ?",
        (tags, item_id),
    )
    if cursor.rowcount == 0:
        logger.warning("No search index entry for item %s; tags not projected", item_id)
    return tags


def rebuild_items_fts(cursor: sqlite3.Cursor) -> int:
    """
    Rebuild the whole index from ``items`` and the tag association.

    Returns
    -------
    int
        Number of items indexed
    """
    cursor.execute("DELETE FROM items_fts")

    cursor.execute("SELECT id, title, content_plain FROM items")
    items = cursor.fetchall()

    for item_id, title, content_plain in items:
        tags = item_tag_projection(cursor, item_id)
        cursor.execute(
            """
            INSERT INTO items_fts (item_id, title, content, tags)
            VALUES (?, ?, ?, ?)
        """,
            (item_id, title or "", content_plain or "", tags),
        )

    return len(items)


class FTSManager:
    """
    Manages the item FTS5 index.

    Handles tag projection resyncs, full rebuilds, and consistency checks
    for the denormalized index.
    """

    def __init__(self, conn: "DatabaseConnection"):
        """
        Initialize FTS manager.

        Parameters
        ----------
        conn : DatabaseConnection
            Database connection
        """
        self._conn = conn

    def cursor(self):
        """Get a database cursor."""
        return self._conn.cursor()

    def resync_item(self, item_id: str) -> str:
        """
        Recompute and store the tag projection for one item.

        Parameters
        ----------
        item_id : str
            Item to resync

        Returns
        -------
        str
            The new projection
        """
        with self._conn.transaction() as cursor:
            return sync_item_tags(cursor, item_id)

    def rebuild_index(self) -> int:
        """
        Rebuild the item FTS index from all existing data.

        Returns
        -------
        int
            Number of items indexed
        """
        with self._conn.transaction() as cursor:
            count = rebuild_items_fts(cursor)
        logger.info("Rebuilt item search index with %d items", count)
        return count

    def get_entry(self, item_id: str) -> Optional[Dict[str, Any]]:
        """
        Get the index entry for an item.

        Returns
        -------
        Optional[Dict[str, Any]]
            Entry with title, content and tags, or None if missing
        """
        cursor = self.cursor()
        cursor.execute(
            "SELECT item_id, title, content, tags FROM items_fts WHERE item_id = ?",
            (item_id,),
        )
        row = cursor.fetchone()
        if not row:
            return None
        return {
            "item_id": row[0],
            "title": row[1],
            "content": row[2],
            "tags": row[3],
        }

    def find_stale_entries(self) -> List[str]:
        """
        Find items whose index entry is missing or has an outdated tag projection.

        Returns
        -------
        List[str]
            Ids of items needing a resync or rebuild
        """
        cursor = self.cursor()
        cursor.execute(
            """
            SELECT i.id, fts.tags
            FROM items i
            LEFT JOIN items_fts fts ON fts.item_id = i.id
            ORDER BY i.id
        """
        )
        entries = cursor.fetchall()

        stale = []
        for item_id, projected in entries:
            if projected is None:
                stale.append(item_id)
                continue
            expected = item_tag_projection(cursor, item_id)
            if set(projected.split()) != set(expected.split()):
                stale.append(item_id)

        if stale:
            logger.info("Found %d stale search index entries", len(stale))
        return stale
