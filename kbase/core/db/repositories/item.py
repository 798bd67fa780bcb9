"""
Item repository for database operations on items.

Inserts, updates and deletes fire the ``items_*`` triggers, which keep the
title and content of each search index entry current. Tag projections are
owned by TagRepository.
"""

import logging
from typing import List, Optional, Union

from kbase.core.models import Item, ItemType, ItemUpdate
from ..errors import NotFoundError
from ..search.predicate import Fragment
from .base import BaseRepository, new_id, next_timestamp, to_timestamp, utc_now

logger = logging.getLogger(__name__)

_ITEM_COLUMNS = (
    "id, workspace_id, item_type, title, content, content_plain, "
    "file_path, file_size, mime_type, created_at, updated_at"
)


class ItemRepository(BaseRepository):
    """
    Repository for item CRUD operations.

    Handles item creation, retrieval, listing by workspace or type, partial
    updates and deletion.
    """

    def create(self, item: Item) -> Item:
        """
        Store a new item.

        Parameters
        ----------
        item : Item
            Item to insert. A missing id is generated; missing timestamps
            default to now.

        Returns
        -------
        Item
            The stored item

        Raises
        ------
        NotFoundError
            If the item's workspace does not exist
        """
        with self.transaction() as cursor:
            cursor.execute("SELECT 1 FROM workspaces WHERE id = ?", (item.workspace_id,))
            if cursor.fetchone() is None:
                raise NotFoundError("workspace", item.workspace_id)

            item_id = item.id or new_id()
            created_at = to_timestamp(item.created_at or utc_now())
            updated_at = to_timestamp(item.updated_at) if item.updated_at else created_at

            cursor.execute(
                f"""
                INSERT INTO items ({_ITEM_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
                (
                    item_id,
                    item.workspace_id,
                    ItemType(item.item_type).value,
                    item.title,
                    item.content,
                    item.content_plain,
                    item.file_path,
                    item.file_size,
                    item.mime_type,
                    created_at,
                    updated_at,
                ),
            )
        logger.debug("Created %s item %s", ItemType(item.item_type).value, item_id)
        return self.get(item_id)

    def get(self, item_id: str) -> Optional[Item]:
        """
        Get an item by id.

        Parameters
        ----------
        item_id : str
            Item id

        Returns
        -------
        Optional[Item]
            The item, or None if not found
        """
        cursor = self.cursor()
        cursor.execute(f"SELECT {_ITEM_COLUMNS} FROM items WHERE id = ?", (item_id,))
        row = cursor.fetchone()
        if not row:
            return None
        return Item(**dict(row))

    def list_by_workspace(self, workspace_id: str) -> List[Item]:
        """List a workspace's items, most recently updated first."""
        cursor = self.cursor()
        cursor.execute(
            f"""
            SELECT {_ITEM_COLUMNS}
            FROM items
            WHERE workspace_id = ?
            ORDER BY updated_at DESC, id
        """,
            (workspace_id,),
        )
        return [Item(**dict(row)) for row in cursor.fetchall()]

    def list_by_type(
        self, workspace_id: str, item_type: Union[ItemType, str]
    ) -> List[Item]:
        """List a workspace's items of one type, most recently updated first."""
        cursor = self.cursor()
        cursor.execute(
            f"""
            SELECT {_ITEM_COLUMNS}
            FROM items
            WHERE workspace_id = ? AND item_type = ?
            ORDER BY updated_at DESC, id
        """,
            (workspace_id, ItemType(item_type).value),
        )
        return [Item(**dict(row)) for row in cursor.fetchall()]

    def update(self, item_id: str, update: ItemUpdate) -> Item:
        """
        Apply a partial update to an item.

        ``updated_at`` is always bumped and never moves backwards, even if
        the clock does.

        Parameters
        ----------
        item_id : str
            Item to update
        update : ItemUpdate
            Fields to change; only explicitly set fields are written

        Returns
        -------
        Item
            The updated item

        Raises
        ------
        NotFoundError
            If the item does not exist
        """
        existing = self.get(item_id)
        if existing is None:
            raise NotFoundError("item", item_id)

        assignments = [
            Fragment(f"{column} = ?", (value,))
            for column, value in update.changes().items()
        ]
        assignments.append(
            Fragment(
                "updated_at = ?",
                (next_timestamp(to_timestamp(existing.updated_at)),),
            )
        )
        statement = (
            Fragment("UPDATE items SET ")
            + Fragment.join(", ", assignments)
            + Fragment(" WHERE id = ?", (item_id,))
        )

        with self.transaction() as cursor:
            cursor.execute(statement.sql, statement.params)
        return self.get(item_id)

    def delete(self, item_id: str) -> bool:
        """
        Delete an item with its tag associations and index entry.

        Returns
        -------
        bool
            True if the item was deleted, False if not found
        """
        with self.transaction() as cursor:
            cursor.execute("DELETE FROM items WHERE id = ?", (item_id,))
            deleted = cursor.rowcount > 0
        return deleted
