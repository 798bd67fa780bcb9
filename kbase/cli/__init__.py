"""
Command-line interface for kbase.
"""
from pathlib import Path
from typing import Optional

import click

from kbase import __version__
from kbase.cli.commands.database import check_index, info, rebuild_index
from kbase.cli.commands.item import item
from kbase.cli.commands.search import search, search_tags, similar
from kbase.cli.commands.tag import tag
from kbase.cli.commands.web import web
from kbase.cli.commands.workspace import workspace
from kbase.cli.common import CLIContext
from kbase.core.logging_config import configure_logging


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.option(
    '--db-path',
    type=click.Path(path_type=Path),
    help='Path to database file (default: OS-specific location, or $KBASE_DB_PATH)',
)
@click.version_option(__version__, prog_name='kbase')
@click.pass_context
def main(ctx, verbose: bool, db_path: Optional[Path]) -> None:
    """kbase - search and organize a personal knowledge base."""
    configure_logging(verbose)
    ctx.obj = CLIContext(db_path=db_path, verbose=verbose)
    ctx.call_on_close(ctx.obj.close)


main.add_command(search)
main.add_command(search_tags)
main.add_command(similar)
main.add_command(rebuild_index)
main.add_command(check_index)
main.add_command(info)
main.add_command(web)
main.add_command(workspace)
main.add_command(item)
main.add_command(tag)
