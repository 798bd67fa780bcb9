"""
Web API server command.

Starts the FastAPI server with uvicorn.
"""
import os

import click
import uvicorn

from kbase.cli.common import db_option
from kbase.core.config import DB_PATH_ENV


@click.command()
@click.option(
    '--host',
    default='127.0.0.1',
    help='Host to bind to (default: 127.0.0.1)'
)
@click.option(
    '--port',
    type=int,
    default=8000,
    help='Port to bind to (default: 8000)'
)
@click.option(
    '--reload',
    is_flag=True,
    help='Auto-reload on code changes'
)
@db_option
@click.pass_context
def web(ctx, host, port, reload):
    """Start the REST API server."""
    # Each request opens its own connection from the environment
    if ctx.obj.db_path:
        os.environ[DB_PATH_ENV] = str(ctx.obj.db_path)

    click.echo(f"Starting kbase server on http://{host}:{port}")
    click.echo(f"  API docs: http://{host}:{port}/docs")
    if reload:
        click.echo("  Auto-reload: enabled (server restarts on code changes)")
    click.echo("\nPress Ctrl+C to stop\n")

    uvicorn.run(
        "kbase.api.main:app",
        host=host,
        port=port,
        reload=reload,
    )
