"""
Workspace repository for database operations on workspaces.
"""

from typing import List, Optional

from kbase.core.models import Workspace
from ..errors import NotFoundError
from .base import BaseRepository, new_id, next_timestamp, to_timestamp, utc_now

_WORKSPACE_COLUMNS = "id, name, description, created_at, updated_at"


class WorkspaceRepository(BaseRepository):
    """
    Repository for workspace CRUD operations.

    Deleting a workspace removes its items through the foreign-key cascade;
    the item delete trigger drops their index entries.
    """

    def create(self, name: str, description: Optional[str] = None) -> Workspace:
        """
        Create a new workspace.

        Parameters
        ----------
        name : str
            Display name
        description : str, optional
            Free-form description

        Returns
        -------
        Workspace
            The stored workspace with its generated id
        """
        now = to_timestamp(utc_now())
        workspace_id = new_id()
        with self.transaction() as cursor:
            cursor.execute(
                """
                INSERT INTO workspaces (id, name, description, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
            """,
                (workspace_id, name, description, now, now),
            )
        return self.get(workspace_id)

    def get(self, workspace_id: str) -> Optional[Workspace]:
        """Get a workspace by id, or None if not found."""
        cursor = self.cursor()
        cursor.execute(
            f"SELECT {_WORKSPACE_COLUMNS} FROM workspaces WHERE id = ?",
            (workspace_id,),
        )
        row = cursor.fetchone()
        if not row:
            return None
        return Workspace(**dict(row))

    def list(self) -> List[Workspace]:
        """
        List all workspaces, most recently updated first.

        Returns
        -------
        List[Workspace]
            All workspaces
        """
        cursor = self.cursor()
        cursor.execute(
            f"SELECT {_WORKSPACE_COLUMNS} FROM workspaces ORDER BY updated_at DESC, id"
        )
        return [Workspace(**dict(row)) for row in cursor.fetchall()]

    def update(
        self,
        workspace_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Workspace:
        """
        Rename a workspace or change its description.

        Raises
        ------
        NotFoundError
            If the workspace does not exist
        """
        existing = self.get(workspace_id)
        if existing is None:
            raise NotFoundError("workspace", workspace_id)

        with self.transaction() as cursor:
            cursor.execute(
                """
                UPDATE workspaces
                SET name = ?, description = ?, updated_at = ?
                WHERE id = ?
            """,
                (
                    name if name is not None else existing.name,
                    description if description is not None else existing.description,
                    next_timestamp(to_timestamp(existing.updated_at)),
                    workspace_id,
                ),
            )
        return self.get(workspace_id)

    def delete(self, workspace_id: str) -> bool:
        """
        Delete a workspace and, by cascade, all of its items.

        Returns
        -------
        bool
            True if the workspace was deleted, False if not found
        """
        with self.transaction() as cursor:
            cursor.execute("DELETE FROM workspaces WHERE id = ?", (workspace_id,))
            deleted = cursor.rowcount > 0
        return deleted

    def get_item_count(self, workspace_id: str) -> int:
        """Number of items in a workspace."""
        cursor = self.cursor()
        cursor.execute(
            "SELECT COUNT(*) FROM items WHERE workspace_id = ?", (workspace_id,)
        )
        return cursor.fetchone()[0]
