"""
Tests for workspace, item and tag storage.
"""

import sqlite3
from datetime import datetime, timezone

import pytest

from kbase.core.db import Database
from kbase.core.db.errors import NotFoundError
from kbase.core.db.repositories.base import next_timestamp, to_timestamp
from kbase.core.models import Item, ItemType, ItemUpdate


# =============================================================================
# Workspaces
# =============================================================================
def test_workspace_crud(temp_db):
    ws = temp_db.workspaces.create("Research", "papers")
    assert ws.id and ws.name == "Research"
    assert temp_db.workspaces.get(ws.id).description == "papers"

    renamed = temp_db.workspaces.update(ws.id, name="Reading")
    assert renamed.name == "Reading"
    assert renamed.description == "papers"
    assert renamed.updated_at >= ws.updated_at

    assert [w.id for w in temp_db.workspaces.list()] == [ws.id]
    assert temp_db.workspaces.delete(ws.id) is True
    assert temp_db.workspaces.get(ws.id) is None
    assert temp_db.workspaces.delete(ws.id) is False


def test_update_missing_workspace(temp_db):
    with pytest.raises(NotFoundError) as excinfo:
        temp_db.workspaces.update("missing", name="x")
    assert excinfo.value.kind == "workspace"
    assert excinfo.value.key == "missing"


def test_workspace_delete_cascades_to_items_and_tags(temp_db, workspace, abc_items):
    assert temp_db.workspaces.get_item_count(workspace.id) == 3
    temp_db.workspaces.delete(workspace.id)

    assert temp_db.items.get(abc_items["A"].id) is None
    x = temp_db.tags.get_by_name("x")
    assert x is not None  # tags are shared across workspaces
    assert temp_db.tags.get_item_count(x.id) == 0


# =============================================================================
# Items
# =============================================================================
def test_item_create_and_get(temp_db, workspace):
    item = temp_db.items.create(
        Item(
            workspace_id=workspace.id,
            item_type=ItemType.AUDIO,
            title="Interview",
            file_path="/tmp/interview.mp3",
            file_size=1024,
            mime_type="audio/mpeg",
        )
    )
    fetched = temp_db.items.get(item.id)
    assert fetched.item_type is ItemType.AUDIO
    assert fetched.file_size == 1024
    assert fetched.mime_type == "audio/mpeg"
    assert fetched.created_at == fetched.updated_at
    assert fetched.created_at.tzinfo is not None


def test_item_in_missing_workspace(temp_db):
    with pytest.raises(NotFoundError):
        temp_db.items.create(Item(workspace_id="missing", title="Orphan"))


def test_item_listing(temp_db, workspace, add_item):
    doc = add_item("Doc", minutes=1)
    img = add_item("Pic", minutes=2, item_type=ItemType.IMAGE)

    assert [i.id for i in temp_db.items.list_by_workspace(workspace.id)] == [img.id, doc.id]
    assert [i.id for i in temp_db.items.list_by_type(workspace.id, "image")] == [img.id]
    assert temp_db.items.list_by_type(workspace.id, ItemType.VIDEO) == []


def test_item_partial_update(temp_db, add_item):
    item = add_item("Draft", "body")
    updated = temp_db.items.update(item.id, ItemUpdate(title="Final"))
    assert updated.title == "Final"
    assert updated.content == "body"
    assert updated.updated_at > item.updated_at


def test_item_update_clears_explicit_nulls(temp_db, workspace):
    item = temp_db.items.create(
        Item(
            workspace_id=workspace.id,
            title="Scan",
            content="ocr text",
            mime_type="image/png",
        )
    )
    assert ItemUpdate().changes() == {}
    assert ItemUpdate(content=None).changes() == {"content": None}

    updated = temp_db.items.update(item.id, ItemUpdate(content=None, title=None))
    assert updated.content is None
    assert updated.title == "Scan"
    assert updated.mime_type == "image/png"

    updated = temp_db.items.update(item.id, ItemUpdate(mime_type=None))
    assert updated.mime_type is None


def test_updated_at_never_moves_backwards(temp_db, workspace):
    future = datetime(2999, 1, 1, tzinfo=timezone.utc)
    item = temp_db.items.create(
        Item(workspace_id=workspace.id, title="Future", created_at=future, updated_at=future)
    )
    updated = temp_db.items.update(item.id, ItemUpdate(content="later"))
    assert updated.updated_at == future


def test_next_timestamp():
    assert next_timestamp("2999-01-01T00:00:00+00:00") == "2999-01-01T00:00:00+00:00"
    assert next_timestamp("2000-01-01T00:00:00+00:00") > "2000-01-01T00:00:00+00:00"
    assert next_timestamp(None)
    assert to_timestamp(datetime(2024, 5, 1, 12, 0)) == "2024-05-01T12:00:00+00:00"


def test_update_missing_item(temp_db):
    with pytest.raises(NotFoundError):
        temp_db.items.update("missing", ItemUpdate(title="x"))


def test_item_delete(temp_db, abc_items):
    a = abc_items["A"]
    assert temp_db.items.delete(a.id) is True
    assert temp_db.items.delete(a.id) is False
    assert temp_db.tags.get_item_count(temp_db.tags.get_by_name("x").id) == 1


# =============================================================================
# Tags
# =============================================================================
def test_tag_crud(temp_db):
    tag = temp_db.tags.create("  reading ", color="#ff0000")
    assert tag.name == "reading"
    assert temp_db.tags.get(tag.id).color == "#ff0000"
    assert temp_db.tags.get_by_name("reading").id == tag.id
    assert temp_db.tags.get_or_create("reading").id == tag.id
    assert [t.name for t in temp_db.tags.list()] == ["reading"]
    assert temp_db.tags.delete(tag.id) is True
    assert temp_db.tags.delete(tag.id) is False


def test_duplicate_tag_name_is_rejected(temp_db):
    temp_db.tags.create("dup")
    with pytest.raises(sqlite3.IntegrityError):
        temp_db.tags.create("dup")


def test_failed_write_releases_the_database(temp_db, db_path):
    """A rejected insert is rolled back, so other connections can still write."""
    temp_db.tags.create("dup")
    with pytest.raises(sqlite3.IntegrityError):
        temp_db.tags.create("dup")
    with pytest.raises(NotFoundError):
        temp_db.items.create(Item(workspace_id="missing", title="Orphan"))
    assert temp_db.conn.connection.in_transaction is False

    with Database(db_path) as other:
        other.tags.create("fresh")
        ws = other.workspaces.create("Elsewhere")
        assert other.workspaces.delete(ws.id) is True

    assert temp_db.tags.get_by_name("fresh") is not None
    temp_db.tags.create("after")


def test_blank_tag_name_is_rejected(temp_db):
    with pytest.raises(ValueError):
        temp_db.tags.create("   ")


def test_attach_requires_existing_rows(temp_db, add_item):
    item = add_item("Doc")
    tag = temp_db.tags.create("t")
    with pytest.raises(NotFoundError) as excinfo:
        temp_db.tags.attach("missing", tag.id)
    assert excinfo.value.kind == "item"
    with pytest.raises(NotFoundError) as excinfo:
        temp_db.tags.attach(item.id, "missing")
    assert excinfo.value.kind == "tag"


def test_detach_requires_existing_rows(temp_db, add_item, caplog):
    item = add_item("Doc", tags=["t"])
    tag = temp_db.tags.get_by_name("t")
    with pytest.raises(NotFoundError) as excinfo:
        temp_db.tags.detach("missing", tag.id)
    assert excinfo.value.kind == "item"
    with pytest.raises(NotFoundError) as excinfo:
        temp_db.tags.detach(item.id, "missing")
    assert excinfo.value.kind == "tag"
    assert "No search index entry" not in caplog.text
    assert [t.name for t in temp_db.tags.list_for_item(item.id)] == ["t"]


def test_tag_item_listing(temp_db, abc_items):
    x = temp_db.tags.get_by_name("x")
    assert temp_db.tags.list_items(x.id) == [abc_items["B"].id, abc_items["A"].id]
    assert temp_db.tags.get_item_count(x.id) == 2
    assert [t.name for t in temp_db.tags.list_for_item(abc_items["C"].id)] == ["y", "z"]
