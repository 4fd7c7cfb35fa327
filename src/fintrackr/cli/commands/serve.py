"""API server command."""

import logging

import click
import uvicorn
from sqlalchemy.exc import SQLAlchemyError

from fintrackr.api.app import create_app
from fintrackr.config import load_settings

logger = logging.getLogger(__name__)


@click.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True, help="Interface to bind")
@click.option("--port", default=5000, show_default=True, envvar="PORT", help="Port to listen on")
@click.pass_context
def serve(ctx, host: str, port: int):
    """Run the JSON API server.

    Exits with status 1 if the database cannot be reached at startup.
    """
    db = ctx.obj["db"]
    try:
        db.connect()
    except SQLAlchemyError as e:
        click.echo(f"Error: Database connection failed: {e}", err=True)
        ctx.exit(1)

    settings = load_settings(database_path=ctx.obj.get("db_path"))
    app = create_app(settings=settings, database=db)
    logger.info("Backend running on %s:%d", host, port)
    uvicorn.run(app, host=host, port=port, log_level=ctx.obj["log_level"].lower())


def register_commands(cli):
    """Register serve command with main CLI."""
    cli.add_command(serve)
