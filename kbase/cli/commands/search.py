"""
Search CLI commands.

Full-text search with facets, tag search and tag-overlap similarity.
"""
from typing import Optional, Tuple

import click

from kbase.cli.common import db_option, echo_results
from kbase.core.db.errors import BackendQueryError
from kbase.core.models import ItemType
from kbase.services.search import SearchService

_ITEM_TYPES = click.Choice([t.value for t in ItemType])


@click.command()
@click.argument('query', nargs=-1)
@click.option('--workspace', '-w', 'workspace_id', help='Only search this workspace')
@click.option('--type', '-t', 'item_type', type=_ITEM_TYPES, help='Only search this item type')
@click.option('--tag', 'tags', multiple=True, help='Required tag (repeatable)')
@click.option('--limit', '-n', type=int, default=None, help='Maximum number of results (default: 50)')
@db_option
@click.pass_context
def search(
    ctx,
    query: Tuple[str, ...],
    workspace_id: Optional[str],
    item_type: Optional[str],
    tags: Tuple[str, ...],
    limit: Optional[int],
):
    """Search items by text, workspace, type and tags.

    Without a QUERY, lists the matching items newest first.

    Example:
        kbase search rust async --tag lang --limit 10
    """
    text = " ".join(query)
    service = SearchService(ctx.obj.get_db())

    try:
        results = service.search(text, workspace_id, item_type, list(tags), limit)
    except BackendQueryError as e:
        click.secho(f"Error during search: {e}", fg='red', err=True)
        raise click.Abort()

    if results:
        click.secho(f"\nFound {len(results)} item(s):\n", fg='green')
    echo_results(results, f"No items found matching '{text}'")


@click.command('search-tags')
@click.argument('tags', nargs=-1, required=True)
@click.option('--all', 'match_all', is_flag=True, help='Require every tag instead of any')
@click.option('--workspace', '-w', 'workspace_id', help='Only search this workspace')
@db_option
@click.pass_context
def search_tags(ctx, tags: Tuple[str, ...], match_all: bool, workspace_id: Optional[str]):
    """Find items carrying any (or, with --all, every) one of TAGS."""
    service = SearchService(ctx.obj.get_db())

    try:
        results = service.search_by_tags(workspace_id, list(tags), match_all)
    except BackendQueryError as e:
        click.secho(f"Error during tag search: {e}", fg='red', err=True)
        raise click.Abort()

    if results:
        click.secho(f"\nFound {len(results)} item(s):\n", fg='green')
    echo_results(results, "No items found with those tags")


@click.command()
@click.argument('item_id')
@click.option('--limit', '-n', type=int, default=None, help='Maximum number of results (default: 10)')
@db_option
@click.pass_context
def similar(ctx, item_id: str, limit: Optional[int]):
    """List items sharing tags with ITEM_ID, most shared tags first."""
    db = ctx.obj.get_db()
    if db.items.get(item_id) is None:
        click.secho(f"Error: Item '{item_id}' not found", fg='red', err=True)
        raise click.Abort()

    try:
        results = SearchService(db).find_similar(item_id, limit)
    except BackendQueryError as e:
        click.secho(f"Error finding similar items: {e}", fg='red', err=True)
        raise click.Abort()

    echo_results(results, "No similar items (no other item shares a tag)")
