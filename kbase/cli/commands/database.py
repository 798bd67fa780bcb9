"""
Database maintenance CLI commands.

Commands for rebuilding and checking the search index and for showing
database statistics.
"""
import click

from kbase.cli.common import db_option


@click.command('rebuild-index')
@db_option
@click.pass_context
def rebuild_index(ctx):
    """Rebuild the full-text search index.

    Run this if search results seem incomplete or `check-index` reports
    stale entries. The index covers item titles, plain-text content and
    tag names.
    """
    click.echo("Rebuilding search index...")
    db = ctx.obj.get_db()
    count = db.rebuild_search_index()
    click.secho(f"Search index rebuilt with {count} item(s).", fg='green')


@click.command('check-index')
@click.option('--fix', is_flag=True, help='Resync stale entries in place')
@db_option
@click.pass_context
def check_index(ctx, fix):
    """Check that every item's index entry matches its tags."""
    db = ctx.obj.get_db()
    stale = db.fts.find_stale_entries()

    if not stale:
        click.secho("Search index is consistent.", fg='green')
        return

    click.secho(f"{len(stale)} stale index entry(ies):", fg='yellow')
    for item_id in stale:
        click.echo(f"  {item_id}")

    if not fix:
        click.echo("\nRun with --fix or `kbase rebuild-index` to repair.")
        ctx.exit(1)

    # A missing entry cannot be resynced, only rebuilt
    if any(db.fts.get_entry(item_id) is None for item_id in stale):
        db.rebuild_search_index()
    else:
        for item_id in stale:
            db.fts.resync_item(item_id)
    click.secho("Stale entries repaired.", fg='green')


@click.command()
@db_option
@click.pass_context
def info(ctx):
    """Show database location and contents."""
    db = ctx.obj.get_db()
    workspaces = db.workspaces.list()
    item_count = sum(db.workspaces.get_item_count(ws.id) for ws in workspaces)
    tags = db.tags.list()

    click.echo(f"Database: {db.conn.db_path}")
    click.echo(f"  Workspaces: {len(workspaces)}")
    click.echo(f"  Items: {item_count}")
    click.echo(f"  Tags: {len(tags)}")
