"""
Shared fixtures: a temporary database per test and an item factory with
controlled timestamps, so recency ordering is deterministic.
"""

import os
import tempfile
from datetime import datetime, timedelta, timezone

import pytest

from kbase.core.db import Database
from kbase.core.models import Item, ItemType

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def db_path():
    """Path to a fresh, empty database file."""
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    yield path
    for suffix in ("", "-wal", "-shm"):
        if os.path.exists(path + suffix):
            os.unlink(path + suffix)


@pytest.fixture
def temp_db(db_path):
    """Create a temporary database for testing."""
    db = Database(db_path)
    yield db
    db.close()


@pytest.fixture
def workspace(temp_db):
    return temp_db.workspaces.create("Notes", "Test workspace")


@pytest.fixture
def add_item(temp_db, workspace):
    """
    Factory creating an item updated ``minutes`` after BASE_TIME, optionally
    tagged (tags are created on demand).
    """

    def _add(
        title,
        content=None,
        tags=(),
        minutes=0,
        item_type=ItemType.DOCUMENT,
        workspace_id=None,
    ):
        ts = BASE_TIME + timedelta(minutes=minutes)
        item = temp_db.items.create(
            Item(
                workspace_id=workspace_id or workspace.id,
                item_type=item_type,
                title=title,
                content=content,
                content_plain=content,
                created_at=ts,
                updated_at=ts,
            )
        )
        for name in tags:
            temp_db.tags.attach(item.id, temp_db.tags.get_or_create(name).id)
        return item

    return _add


@pytest.fixture
def abc_items(add_item):
    """
    The reference workspace: A{x,y}, B{x}, C{y,z}, updated in that order
    (C most recent).
    """
    a = add_item("Alpha", "first note", tags=["x", "y"], minutes=1)
    b = add_item("Beta", "second note", tags=["x"], minutes=2)
    c = add_item("Gamma", "third note", tags=["y", "z"], minutes=3)
    return {"A": a, "B": b, "C": c}
