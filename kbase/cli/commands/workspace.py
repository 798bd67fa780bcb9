"""
Workspace management CLI commands.
"""
from typing import Optional

import click

from kbase.cli.common import db_option


@click.group()
def workspace():
    """Manage workspaces."""
    pass


@workspace.command('create')
@click.argument('name')
@click.option('--description', '-d', help='Workspace description')
@db_option
@click.pass_context
def create(ctx, name: str, description: Optional[str]) -> None:
    """Create a new workspace.

    Example:
        kbase workspace create Research --description "Papers and notes"
    """
    ws = ctx.obj.get_db().workspaces.create(name, description)
    click.secho(f"Created workspace '{ws.name}' (ID: {ws.id})", fg='green')


@workspace.command('list')
@db_option
@click.pass_context
def list_workspaces(ctx) -> None:
    """List all workspaces."""
    db = ctx.obj.get_db()
    workspaces = db.workspaces.list()

    if not workspaces:
        click.echo("No workspaces found. Create one with: kbase workspace create <name>")
        return

    click.echo(f"\nFound {len(workspaces)} workspace(s):\n")
    for ws in workspaces:
        click.echo(f"  {ws.id}  {ws.name}")
        if ws.description:
            click.echo(f"        {ws.description}")
        click.echo(f"        Items: {db.workspaces.get_item_count(ws.id)}")
        click.echo()


@workspace.command('delete')
@click.argument('workspace_id')
@click.option('--yes', '-y', is_flag=True, help='Do not ask for confirmation')
@db_option
@click.pass_context
def delete(ctx, workspace_id: str, yes: bool) -> None:
    """Delete a workspace and all of its items."""
    db = ctx.obj.get_db()
    ws = db.workspaces.get(workspace_id)
    if ws is None:
        click.secho(f"Error: Workspace '{workspace_id}' not found", fg='red', err=True)
        raise click.Abort()

    count = db.workspaces.get_item_count(workspace_id)
    if not yes:
        click.confirm(f"Delete workspace '{ws.name}' and its {count} item(s)?", abort=True)

    db.workspaces.delete(workspace_id)
    click.secho(f"Deleted workspace '{ws.name}'", fg='green')
