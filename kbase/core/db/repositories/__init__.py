"""
Repository classes for database operations.

Each repository handles CRUD operations for a specific domain entity.
"""

from .base import BaseRepository
from .item import ItemRepository
from .tag import TagRepository
from .workspace import WorkspaceRepository

__all__ = [
    "BaseRepository",
    "ItemRepository",
    "TagRepository",
    "WorkspaceRepository",
]
