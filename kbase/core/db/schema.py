"""
Database schema management for the knowledge base.

Provides SchemaManager class that handles table creation,
indexes, the FTS5 item index, and its sync triggers.
"""

import logging
from typing import TYPE_CHECKING

from .search.fts import rebuild_items_fts

if TYPE_CHECKING:
    from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


class SchemaManager:
    """
    Manages database schema creation.

    This class handles:
    - Initial table creation
    - FTS5 virtual table setup
    - Index creation
    - Trigger setup for FTS title/content sync
    """

    def __init__(self, conn: "DatabaseConnection"):
        """
        Initialize schema manager.

        Parameters
        ----------
        conn : DatabaseConnection
            Database connection to use for schema operations.
        """
        self._conn = conn

    def ensure(self) -> None:
        """Ensure all database schema exists and is up to date."""
        with self._conn.transaction() as cursor:
            # Create core tables
            self._create_workspaces_table(cursor)
            self._create_items_table(cursor)
            self._create_tags_table(cursor)
            self._create_item_tags_table(cursor)

            # Create FTS table and triggers
            self._create_items_fts(cursor)
            self._create_fts_triggers(cursor)

            # Create indexes
            self._create_indexes(cursor)

            # Backfill the index for databases created before it existed
            self._check_fts_backfill(cursor)

        logger.info("Database schema initialized at %s", self._conn.db_path)

    def _create_workspaces_table(self, cursor) -> None:
        """Create workspaces table."""
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS workspaces (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                description TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)

    def _create_items_table(self, cursor) -> None:
        """Create items table."""
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS items (
                id TEXT PRIMARY KEY,
                workspace_id TEXT NOT NULL,
                item_type TEXT NOT NULL
                    CHECK (item_type IN ('document', 'image', 'audio', 'video')),
                title TEXT NOT NULL DEFAULT '',
                content TEXT,
                content_plain TEXT,
                file_path TEXT,
                file_size INTEGER,
                mime_type TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                FOREIGN KEY (workspace_id) REFERENCES workspaces(id) ON DELETE CASCADE
            )
        """)

    def _create_tags_table(self, cursor) -> None:
        """Create tags table. Tags are shared across workspaces."""
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS tags (
                id TEXT PRIMARY KEY,
                name TEXT UNIQUE NOT NULL,
                color TEXT,
                created_at TEXT NOT NULL
            )
        """)

    def _create_item_tags_table(self, cursor) -> None:
        """Create junction table for item-tag associations."""
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS item_tags (
                item_id TEXT NOT NULL,
                tag_id TEXT NOT NULL,
                created_at TEXT NOT NULL,
                PRIMARY KEY (item_id, tag_id),
                FOREIGN KEY (item_id) REFERENCES items(id) ON DELETE CASCADE,
                FOREIGN KEY (tag_id) REFERENCES tags(id) ON DELETE CASCADE
            )
        """)

    def _create_items_fts(self, cursor) -> None:
        """Create FTS5 table holding the searchable projection of each item."""
        cursor.execute("""
            CREATE VIRTUAL TABLE IF NOT EXISTS items_fts USING fts5(
                item_id UNINDEXED,
                title,
                content,
                tags,
                tokenize='unicode61'
            )
        """)

    def _create_fts_triggers(self, cursor) -> None:
        """
        Create triggers to keep title and content in sync with items.

        The tags column is not touched here; it is recomputed by the tag
        association writes.
        """
        cursor.execute("""
            CREATE TRIGGER IF NOT EXISTS items_ai AFTER INSERT ON items BEGIN
                INSERT INTO items_fts (item_id, title, content, tags)
                VALUES (new.id, new.title, COALESCE(new.content_plain, ''), '');
            END
        """)

        cursor.execute("""
            CREATE TRIGGER IF NOT EXISTS items_ad AFTER DELETE ON items BEGIN
                DELETE FROM items_fts WHERE item_id = old.id;
            END
        """)

        cursor.execute("""
            CREATE TRIGGER IF NOT EXISTS items_au AFTER UPDATE OF title, content_plain ON items BEGIN
                UPDATE items_fts
                SET title = new.title, content = COALESCE(new.content_plain, '')
                WHERE item_id = new.id;
            END
        """)

    def _create_indexes(self, cursor) -> None:
        """Create performance indexes."""
        indexes = [
            ("idx_workspaces_updated", "workspaces", "updated_at"),
            ("idx_items_workspace", "items", "workspace_id"),
            ("idx_items_type", "items", "item_type"),
            ("idx_items_updated", "items", "updated_at"),
            ("idx_item_tags_tag", "item_tags", "tag_id"),
        ]

        for idx_name, table, column in indexes:
            cursor.execute(
                f"CREATE INDEX IF NOT EXISTS {idx_name} ON {table}({column})"
            )

    def _check_fts_backfill(self, cursor) -> None:
        """Check if the item FTS index needs to be rebuilt for existing databases."""
        cursor.execute("SELECT COUNT(*) FROM items_fts")
        indexed_count = cursor.fetchone()[0]
        cursor.execute("SELECT COUNT(*) FROM items")
        item_count = cursor.fetchone()[0]

        if item_count > 0 and indexed_count == 0:
            logger.info("Rebuilding item search index for %d items...", item_count)
            rebuild_items_fts(cursor)
