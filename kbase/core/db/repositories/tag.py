"""
Tag repository for database operations on tags and item-tag associations.

Every association write recomputes the affected item's tag projection in
the search index inside the same transaction, so the projection can never
be left out of step with ``item_tags``.
"""

import logging
from typing import List, Optional

from kbase.core.models import Tag
from ..errors import NotFoundError
from ..search.fts import sync_item_tags
from .base import BaseRepository, new_id, to_timestamp, utc_now

logger = logging.getLogger(__name__)

_TAG_COLUMNS = "id, name, color, created_at"


class TagRepository(BaseRepository):
    """
    Repository for tag operations.

    Handles tag CRUD plus attaching, detaching, and querying tags on items.
    """

    def create(self, name: str, color: Optional[str] = None) -> Tag:
        """
        Create a new tag.

        Parameters
        ----------
        name : str
            Unique tag name; surrounding whitespace is stripped
        color : str, optional
            Display color

        Returns
        -------
        Tag
            The stored tag

        Raises
        ------
        ValueError
            If the name is blank
        sqlite3.IntegrityError
            If a tag with this name already exists
        """
        name = name.strip()
        if not name:
            raise ValueError("tag name must not be blank")

        tag_id = new_id()
        with self.transaction() as cursor:
            cursor.execute(
                "INSERT INTO tags (id, name, color, created_at) VALUES (?, ?, ?, ?)",
                (tag_id, name, color, to_timestamp(utc_now())),
            )
        return self.get(tag_id)

    def get(self, tag_id: str) -> Optional[Tag]:
        """Get a tag by id, or None if not found."""
        cursor = self.cursor()
        cursor.execute(f"SELECT {_TAG_COLUMNS} FROM tags WHERE id = ?", (tag_id,))
        row = cursor.fetchone()
        if not row:
            return None
        return Tag(**dict(row))

    def get_by_name(self, name: str) -> Optional[Tag]:
        """Get a tag by its exact name, or None if not found."""
        cursor = self.cursor()
        cursor.execute(
            f"SELECT {_TAG_COLUMNS} FROM tags WHERE name = ?", (name.strip(),)
        )
        row = cursor.fetchone()
        if not row:
            return None
        return Tag(**dict(row))

    def get_or_create(self, name: str, color: Optional[str] = None) -> Tag:
        """Return the tag with this name, creating it if needed."""
        existing = self.get_by_name(name)
        if existing is not None:
            return existing
        return self.create(name, color)

    def list(self) -> List[Tag]:
        """
        List all tags.

        Returns
        -------
        List[Tag]
            Tags ordered by name
        """
        cursor = self.cursor()
        cursor.execute(f"SELECT {_TAG_COLUMNS} FROM tags ORDER BY name")
        return [Tag(**dict(row)) for row in cursor.fetchall()]

    def get_item_count(self, tag_id: str) -> int:
        """Number of items carrying a tag."""
        cursor = self.cursor()
        cursor.execute("SELECT COUNT(*) FROM item_tags WHERE tag_id = ?", (tag_id,))
        return cursor.fetchone()[0]

    def delete(self, tag_id: str) -> bool:
        """
        Delete a tag, detaching it from every item.

        The cascade removes the associations; each affected item's tag
        projection is recomputed in the same transaction.

        Returns
        -------
        bool
            True if the tag was deleted, False if not found
        """
        with self.transaction() as cursor:
            cursor.execute("SELECT item_id FROM item_tags WHERE tag_id = ?", (tag_id,))
            affected = [row[0] for row in cursor.fetchall()]

            cursor.execute("DELETE FROM tags WHERE id = ?", (tag_id,))
            deleted = cursor.rowcount > 0

            for item_id in affected:
                sync_item_tags(cursor, item_id)

        if affected:
            logger.debug("Deleted tag %s from %d item(s)", tag_id, len(affected))
        return deleted

    def attach(self, item_id: str, tag_id: str) -> bool:
        """
        Tag an item. Attaching a tag the item already has is a no-op.

        Parameters
        ----------
        item_id : str
            Item to tag
        tag_id : str
            Tag to attach

        Returns
        -------
        bool
            True if a new association was written

        Raises
        ------
        NotFoundError
            If the item or the tag does not exist
        """
        with self.transaction() as cursor:
            self._require(cursor, "items", "item", item_id)
            self._require(cursor, "tags", "tag", tag_id)

            cursor.execute(
                """
                INSERT OR IGNORE INTO item_tags (item_id, tag_id, created_at)
                VALUES (?, ?, ?)
            """,
                (item_id, tag_id, to_timestamp(utc_now())),
            )
            added = cursor.rowcount > 0
            sync_item_tags(cursor, item_id)
        return added

    def detach(self, item_id: str, tag_id: str) -> bool:
        """
        Remove a tag from an item. Removing an absent tag is a no-op.

        Returns
        -------
        bool
            True if an association was removed

        Raises
        ------
        NotFoundError
            If the item or the tag does not exist
        """
        with self.transaction() as cursor:
            self._require(cursor, "items", "item", item_id)
            self._require(cursor, "tags", "tag", tag_id)

            cursor.execute(
                "DELETE FROM item_tags WHERE item_id = ? AND tag_id = ?",
                (item_id, tag_id),
            )
            removed = cursor.rowcount > 0
            sync_item_tags(cursor, item_id)
        return removed

    def list_for_item(self, item_id: str) -> List[Tag]:
        """
        Get all tags on an item.

        Parameters
        ----------
        item_id : str
            Item id

        Returns
        -------
        List[Tag]
            Tags ordered by name
        """
        cursor = self.cursor()
        cursor.execute(
            """
            SELECT t.id, t.name, t.color, t.created_at
            FROM tags t
            INNER JOIN item_tags it ON it.tag_id = t.id
            WHERE it.item_id = ?
            ORDER BY t.name
        """,
            (item_id,),
        )
        return [Tag(**dict(row)) for row in cursor.fetchall()]

    def list_items(self, tag_id: str) -> List[str]:
        """Ids of the items carrying a tag, most recently updated first."""
        cursor = self.cursor()
        cursor.execute(
            """
            SELECT i.id
            FROM items i
            INNER JOIN item_tags it ON it.item_id = i.id
            WHERE it.tag_id = ?
            ORDER BY i.updated_at DESC, i.id
        """,
            (tag_id,),
        )
        return [row[0] for row in cursor.fetchall()]

    @staticmethod
    def _require(cursor, table: str, kind: str, key: str) -> None:
        cursor.execute(f"SELECT 1 FROM {table} WHERE id = ?", (key,))
        if cursor.fetchone() is None:
            raise NotFoundError(kind, key)
