"""
Tests for keeping the search index tag projection in step with item_tags.
"""

import sqlite3

import pytest

from kbase.core.db import Database
from kbase.core.db.search import fts as fts_module
from kbase.core.db.search.fts import project_tag_names
from kbase.core.models import ItemUpdate


def projected_tags(db, item_id):
    return db.fts.get_entry(item_id)["tags"]


# =============================================================================
# Projection on attach / detach
# =============================================================================
def test_projection_is_sorted_space_joined_set(temp_db, add_item):
    item = add_item("Doc", tags=["zeta", "alpha", "mid"])
    assert projected_tags(temp_db, item.id) == "alpha mid zeta"
    assert project_tag_names(["b", "a", "b"]) == "a b"


def test_attach_twice_is_idempotent(temp_db, add_item):
    item = add_item("Doc", tags=["x"])
    once = projected_tags(temp_db, item.id)

    tag = temp_db.tags.get_by_name("x")
    assert temp_db.tags.attach(item.id, tag.id) is False
    assert projected_tags(temp_db, item.id) == once == "x"
    assert [t.name for t in temp_db.tags.list_for_item(item.id)] == ["x"]


def test_detach_updates_projection(temp_db, abc_items):
    a = abc_items["A"]
    x = temp_db.tags.get_by_name("x")
    assert temp_db.tags.detach(a.id, x.id) is True
    assert projected_tags(temp_db, a.id) == "y"
    assert temp_db.tags.detach(a.id, x.id) is False
    assert projected_tags(temp_db, a.id) == "y"


def test_new_item_has_empty_projection(temp_db, add_item):
    item = add_item("Fresh", "body text")
    entry = temp_db.fts.get_entry(item.id)
    assert entry == {"item_id": item.id, "title": "Fresh", "content": "body text", "tags": ""}


def test_failed_projection_rolls_back_association(temp_db, add_item, monkeypatch):
    """The association write and the projection overwrite commit together or not at all."""
    item = add_item("Doc", tags=["keep"])
    tag = temp_db.tags.create("new")

    def broken_sync(cursor, item_id):
        raise sqlite3.OperationalError("disk I/O error")

    monkeypatch.setattr("kbase.core.db.repositories.tag.sync_item_tags", broken_sync)
    with pytest.raises(sqlite3.OperationalError):
        temp_db.tags.attach(item.id, tag.id)
    monkeypatch.undo()

    assert [t.name for t in temp_db.tags.list_for_item(item.id)] == ["keep"]
    assert projected_tags(temp_db, item.id) == "keep"
    assert temp_db.fts.find_stale_entries() == []


def test_deleting_a_tag_resyncs_every_item(temp_db, abc_items):
    y = temp_db.tags.get_by_name("y")
    assert temp_db.tags.delete(y.id) is True

    assert projected_tags(temp_db, abc_items["A"].id) == "x"
    assert projected_tags(temp_db, abc_items["B"].id) == "x"
    assert projected_tags(temp_db, abc_items["C"].id) == "z"
    assert temp_db.search("y") == []
    assert temp_db.fts.find_stale_entries() == []


# =============================================================================
# Title/content triggers
# =============================================================================
def test_item_edits_reach_the_index(temp_db, add_item):
    item = add_item("Draft", "old words", tags=["t"])
    temp_db.items.update(item.id, ItemUpdate(title="Final", content_plain="new words"))

    entry = temp_db.fts.get_entry(item.id)
    assert entry["title"] == "Final"
    assert entry["content"] == "new words"
    assert entry["tags"] == "t"
    assert [r.id for r in temp_db.search("final")] == [item.id]
    assert temp_db.search("old") == []


def test_deleting_items_and_workspaces_removes_entries(temp_db, workspace, abc_items):
    a = abc_items["A"]
    temp_db.items.delete(a.id)
    assert temp_db.fts.get_entry(a.id) is None

    temp_db.workspaces.delete(workspace.id)
    assert temp_db.fts.get_entry(abc_items["B"].id) is None
    assert temp_db.search("") == []


# =============================================================================
# Repair paths
# =============================================================================
def test_stale_entries_are_detected_and_resynced(temp_db, abc_items):
    a = abc_items["A"].id
    with temp_db.conn.transaction() as cursor:
        cursor.execute("UPDATE items_fts SET tags = '' WHERE item_id = ?", (a,))

    assert temp_db.fts.find_stale_entries() == [a]
    assert temp_db.fts.resync_item(a) == "x y"
    assert temp_db.fts.find_stale_entries() == []


def test_rebuild_index_restores_missing_entries(temp_db, abc_items):
    with temp_db.conn.transaction() as cursor:
        cursor.execute("DELETE FROM items_fts WHERE item_id = ?", (abc_items["B"].id,))
    assert abc_items["B"].id in temp_db.fts.find_stale_entries()

    assert temp_db.rebuild_search_index() == 3
    assert projected_tags(temp_db, abc_items["B"].id) == "x"
    assert temp_db.fts.find_stale_entries() == []


def test_empty_index_is_backfilled_on_open(db_path, abc_items, temp_db):
    with temp_db.conn.transaction() as cursor:
        cursor.execute("DELETE FROM items_fts")

    with Database(db_path) as reopened:
        assert projected_tags(reopened, abc_items["A"].id) == "x y"
        assert reopened.fts.find_stale_entries() == []


def test_missing_index_row_only_warns(temp_db, add_item, caplog):
    item = add_item("Doc")
    with temp_db.conn.transaction() as cursor:
        cursor.execute("DELETE FROM items_fts WHERE item_id = ?", (item.id,))
        assert fts_module.sync_item_tags(cursor, item.id) == ""
    assert "No search index entry" in caplog.text
