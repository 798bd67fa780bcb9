"""
Tag management CLI commands.
"""
import sqlite3
from typing import Optional

import click

from kbase.cli.common import db_option


@click.group()
def tag():
    """Manage tags."""
    pass


@tag.command('create')
@click.argument('name')
@click.option('--color', '-c', help='Display color, e.g. #ff8800')
@db_option
@click.pass_context
def create(ctx, name: str, color: Optional[str]) -> None:
    """Create a new tag."""
    try:
        new_tag = ctx.obj.get_db().tags.create(name, color)
    except sqlite3.IntegrityError:
        click.secho(f"Error: Tag '{name.strip()}' already exists", fg='red', err=True)
        raise click.Abort()
    except ValueError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        raise click.Abort()
    click.secho(f"Created tag '{new_tag.name}' (ID: {new_tag.id})", fg='green')


@tag.command('list')
@db_option
@click.pass_context
def list_tags(ctx) -> None:
    """List all tags with their item counts."""
    db = ctx.obj.get_db()
    tags = db.tags.list()

    if not tags:
        click.echo("No tags found. Create one with: kbase tag create <name>")
        return

    for t in tags:
        click.echo(f"  {t.name:24s} {db.tags.get_item_count(t.id):5d} item(s)  {t.id}")


@tag.command('delete')
@click.argument('name')
@db_option
@click.pass_context
def delete(ctx, name: str) -> None:
    """Delete a tag by name and remove it from every item."""
    db = ctx.obj.get_db()
    existing = db.tags.get_by_name(name)
    if existing is None:
        click.secho(f"Error: Tag '{name}' not found", fg='red', err=True)
        raise click.Abort()

    count = db.tags.get_item_count(existing.id)
    db.tags.delete(existing.id)
    click.secho(f"Deleted tag '{existing.name}' from {count} item(s)", fg='green')
