"""
Tests for the kbase command-line interface.
"""

import re

import pytest
from click.testing import CliRunner

from kbase.cli import main
from kbase.core.db import Database


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, db_path):
    def _invoke(*args):
        return runner.invoke(main, ["--db-path", db_path, *args])

    return _invoke


def created_id(output):
    return re.search(r"ID: ([0-9a-f-]+)\)", output).group(1)


@pytest.fixture
def seeded(invoke):
    ws = created_id(invoke("workspace", "create", "Notes").output)
    items = {}
    for key, title, tags in [
        ("A", "Alpha python", ["x", "y"]),
        ("B", "Beta", ["x"]),
        ("C", "Gamma", ["y", "z"]),
    ]:
        args = ["item", "add", "-w", ws, "--title", title, "--content", f"{key} body"]
        for name in tags:
            args += ["--tag", name]
        result = invoke(*args)
        assert result.exit_code == 0, result.output
        items[key] = created_id(result.output)
    return {"workspace": ws, "items": items}


def test_workspace_commands(invoke):
    result = invoke("workspace", "create", "Research", "-d", "papers")
    assert result.exit_code == 0
    ws = created_id(result.output)

    listed = invoke("workspace", "list")
    assert "Research" in listed.output
    assert "papers" in listed.output

    assert invoke("workspace", "delete", ws, "--yes").exit_code == 0
    assert "No workspaces found" in invoke("workspace", "list").output


def test_item_add_to_missing_workspace(invoke):
    result = invoke("item", "add", "-w", "missing", "--title", "x")
    assert result.exit_code != 0
    assert "workspace not found" in result.output


def test_item_show_and_tagging(invoke, seeded):
    a = seeded["items"]["A"]
    shown = invoke("item", "show", a)
    assert "Alpha python" in shown.output
    assert "Tags: x, y" in shown.output

    assert "Tags: new, x, y" in invoke("item", "tag", a, "new").output
    assert "Tags: new, y" in invoke("item", "untag", a, "x", "unknown").output


def test_item_add_from_file(invoke, seeded, tmp_path):
    note = tmp_path / "note.txt"
    note.write_text("imported from disk")
    result = invoke("item", "add", "-w", seeded["workspace"], "--file", str(note))
    assert result.exit_code == 0, result.output

    shown = invoke("item", "show", created_id(result.output))
    assert "note.txt" in shown.output
    assert "text/plain" in shown.output
    assert "imported from disk" in shown.output


def test_search_command(invoke, seeded):
    result = invoke("search", "pyth")
    assert result.exit_code == 0
    assert seeded["items"]["A"] in result.output
    assert "relevance" in result.output

    none = invoke("search", "zzzqqq")
    assert "No items found" in none.output

    tagged = invoke("search", "--tag", "y", "--tag", "z")
    assert seeded["items"]["C"] in tagged.output
    assert seeded["items"]["A"] not in tagged.output


def test_search_tags_command(invoke, seeded):
    items = seeded["items"]
    all_mode = invoke("search-tags", "x", "y", "--all").output
    assert items["A"] in all_mode
    assert items["B"] not in all_mode

    any_mode = invoke("search-tags", "x", "y").output
    assert all(item_id in any_mode for item_id in items.values())


def test_similar_command(invoke, seeded):
    items = seeded["items"]
    output = invoke("similar", items["A"]).output
    assert items["B"] in output and items["C"] in output
    assert "overlap 1" in output

    missing = invoke("similar", "missing")
    assert missing.exit_code != 0


def test_tag_commands(invoke, seeded):
    assert invoke("tag", "create", "fresh").exit_code == 0
    duplicate = invoke("tag", "create", "fresh")
    assert duplicate.exit_code != 0
    assert "already exists" in duplicate.output

    listing = invoke("tag", "list").output
    assert "fresh" in listing and "x" in listing

    assert "from 2 item(s)" in invoke("tag", "delete", "x").output
    assert "Tags: y" in invoke("item", "show", seeded["items"]["A"]).output


def test_index_commands(invoke, seeded, db_path):
    assert "consistent" in invoke("check-index").output

    with Database(db_path) as db:
        with db.conn.transaction() as cursor:
            cursor.execute("UPDATE items_fts SET tags = ''")

    stale = invoke("check-index")
    assert stale.exit_code == 1
    assert "3 stale" in stale.output

    assert invoke("check-index", "--fix").exit_code == 0
    assert "consistent" in invoke("check-index").output

    rebuilt = invoke("rebuild-index")
    assert "3 item(s)" in rebuilt.output


def test_info(invoke, seeded):
    output = invoke("info").output
    assert "Workspaces: 1" in output
    assert "Items: 3" in output
    assert "Tags: 3" in output


def test_subcommand_db_path_option(runner, db_path):
    result = runner.invoke(main, ["workspace", "create", "Notes", "--db-path", db_path])
    assert result.exit_code == 0
    with Database(db_path) as db:
        assert [w.name for w in db.workspaces.list()] == ["Notes"]
