"""
Item management CLI commands.

Commands for adding, inspecting, tagging and deleting workspace items.
"""
import mimetypes
from pathlib import Path
from typing import Optional, Tuple

import click

from kbase.cli.common import db_option
from kbase.core.db.errors import NotFoundError
from kbase.core.models import Item, ItemType

_ITEM_TYPES = click.Choice([t.value for t in ItemType])


@click.group()
def item():
    """Manage items."""
    pass


@item.command('add')
@click.option('--workspace', '-w', 'workspace_id', required=True, help='Workspace to add the item to')
@click.option('--type', '-t', 'item_type', type=_ITEM_TYPES, default='document', show_default=True)
@click.option('--title', default='', help='Item title')
@click.option('--content', help='Text content (documents)')
@click.option(
    '--file', 'file_path',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Attach a file; text files added as documents become the content',
)
@click.option('--tag', 'tags', multiple=True, help='Tag to attach (repeatable, created if missing)')
@db_option
@click.pass_context
def add(
    ctx,
    workspace_id: str,
    item_type: str,
    title: str,
    content: Optional[str],
    file_path: Optional[Path],
    tags: Tuple[str, ...],
) -> None:
    """Add an item to a workspace.

    Example:
        kbase item add -w <workspace-id> --title "Reading list" --content "..." --tag books
    """
    db = ctx.obj.get_db()

    new_item = Item(
        workspace_id=workspace_id,
        item_type=item_type,
        title=title or (file_path.name if file_path else ''),
        content=content,
        content_plain=content,
    )
    if file_path:
        new_item.file_path = str(file_path.resolve())
        new_item.file_size = file_path.stat().st_size
        new_item.mime_type = mimetypes.guess_type(file_path.name)[0]
        if item_type == ItemType.DOCUMENT.value and content is None:
            text = file_path.read_text(encoding='utf-8', errors='replace')
            new_item.content = text
            new_item.content_plain = text

    try:
        created = db.items.create(new_item)
    except NotFoundError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        raise click.Abort()

    for name in tags:
        db.tags.attach(created.id, db.tags.get_or_create(name).id)

    click.secho(f"Added {created.item_type.value} '{created.title}' (ID: {created.id})", fg='green')


@item.command('show')
@click.argument('item_id')
@db_option
@click.pass_context
def show(ctx, item_id: str) -> None:
    """Show an item with its tags."""
    db = ctx.obj.get_db()
    found = db.items.get(item_id)
    if found is None:
        click.secho(f"Error: Item '{item_id}' not found", fg='red', err=True)
        raise click.Abort()

    click.echo(f"ID: {found.id}")
    click.echo(f"  Title: {found.title}")
    click.echo(f"  Type: {found.item_type.value}")
    click.echo(f"  Workspace: {found.workspace_id}")
    click.echo(f"  Created: {found.created_at}")
    click.echo(f"  Updated: {found.updated_at}")
    if found.file_path:
        click.echo(f"  File: {found.file_path} ({found.file_size} bytes, {found.mime_type or 'unknown type'})")
    tag_names = [t.name for t in db.tags.list_for_item(item_id)]
    click.echo(f"  Tags: {', '.join(tag_names) if tag_names else '(none)'}")
    if found.content_plain:
        click.echo()
        click.echo(found.content_plain)


@item.command('list')
@click.option('--workspace', '-w', 'workspace_id', required=True, help='Workspace to list')
@click.option('--type', '-t', 'item_type', type=_ITEM_TYPES, help='Only list this item type')
@db_option
@click.pass_context
def list_items(ctx, workspace_id: str, item_type: Optional[str]) -> None:
    """List a workspace's items, newest first."""
    db = ctx.obj.get_db()
    if item_type:
        items = db.items.list_by_type(workspace_id, item_type)
    else:
        items = db.items.list_by_workspace(workspace_id)

    if not items:
        click.echo("No items found.")
        return

    for it in items:
        click.echo(f"  {it.id}  [{it.item_type.value}] {it.title or '(untitled)'}")


@item.command('delete')
@click.argument('item_id')
@db_option
@click.pass_context
def delete(ctx, item_id: str) -> None:
    """Delete an item."""
    if not ctx.obj.get_db().items.delete(item_id):
        click.secho(f"Error: Item '{item_id}' not found", fg='red', err=True)
        raise click.Abort()
    click.secho(f"Deleted item {item_id}", fg='green')


@item.command('tag')
@click.argument('item_id')
@click.argument('names', nargs=-1, required=True)
@db_option
@click.pass_context
def tag_item(ctx, item_id: str, names: Tuple[str, ...]) -> None:
    """Attach tags to an item, creating tags that do not exist yet."""
    db = ctx.obj.get_db()
    if db.items.get(item_id) is None:
        click.secho(f"Error: Item '{item_id}' not found", fg='red', err=True)
        raise click.Abort()

    for name in names:
        db.tags.attach(item_id, db.tags.get_or_create(name).id)
    tag_names = [t.name for t in db.tags.list_for_item(item_id)]
    click.secho(f"Tags: {', '.join(tag_names)}", fg='green')


@item.command('untag')
@click.argument('item_id')
@click.argument('names', nargs=-1, required=True)
@db_option
@click.pass_context
def untag_item(ctx, item_id: str, names: Tuple[str, ...]) -> None:
    """Remove tags from an item. Unknown tag names are ignored."""
    db = ctx.obj.get_db()
    if db.items.get(item_id) is None:
        click.secho(f"Error: Item '{item_id}' not found", fg='red', err=True)
        raise click.Abort()

    for name in names:
        existing = db.tags.get_by_name(name)
        if existing is not None:
            db.tags.detach(item_id, existing.id)
    tag_names = [t.name for t in db.tags.list_for_item(item_id)]
    click.secho(f"Tags: {', '.join(tag_names) if tag_names else '(none)'}", fg='green')
