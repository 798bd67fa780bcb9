"""
Shared CLI state, options and output helpers.
"""
from pathlib import Path
from typing import List, Optional

import click

from kbase.core.db import Database
from kbase.core.models import SearchResult


class CLIContext:
    """
    Object passed between commands via ``ctx.obj``.

    The database is opened lazily on first use and closed when the
    top-level command finishes.
    """

    def __init__(self, db_path: Optional[Path] = None, verbose: bool = False):
        self.db_path = db_path
        self.verbose = verbose
        self._db: Optional[Database] = None

    def get_db(self) -> Database:
        if self._db is None:
            self._db = Database(str(self.db_path) if self.db_path else None)
        return self._db

    def close(self) -> None:
        if self._db is not None:
            self._db.close()
            self._db = None


def _store_db_path(ctx: click.Context, param: click.Parameter, value: Optional[Path]):
    if value is not None:
        ctx.ensure_object(CLIContext).db_path = value
    return value


db_option = click.option(
    '--db-path',
    type=click.Path(path_type=Path),
    callback=_store_db_path,
    expose_value=False,
    help='Path to database file (default: OS-specific location, or $KBASE_DB_PATH)',
)


def echo_results(results: List[SearchResult], empty_message: str) -> None:
    """Print search results one block per item."""
    if not results:
        click.echo(empty_message)
        return

    for result in results:
        score = result.score
        rank = result.rank.kind.value
        if score is not None:
            rank = f"{rank} {score:g}" if isinstance(score, float) else f"{rank} {score}"
        click.echo(f"{result.id}  [{result.item_type.value}] {result.title or '(untitled)'}")
        click.echo(f"  Workspace: {result.workspace_id}")
        click.echo(f"  Updated: {result.updated_at}")
        click.echo(f"  Rank: {rank}")
        click.echo()
