"""Main CLI entry point."""

import logging

import click
from sqlalchemy.exc import SQLAlchemyError

from fintrackr.database.factories import create_database

# Import and register all commands at module level
from fintrackr.cli.commands import (
    budget,
    dashboard,
    export,
    import_cmd,
    serve,
)

# Commands that talk to the API rather than the local database
REMOTE_COMMANDS = {"dashboard"}


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FINTRACKR_DB_PATH environment variable)",
    envvar="FINTRACKR_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    show_default=True,
    envvar="FINTRACKR_LOG_LEVEL",
    help="Logging level",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """FinTrackr - personal finance tracker.

    Serves the JSON API and offers budget, CSV import/export and
    dashboard commands.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj["db_path"] = db_path
    ctx.obj["log_level"] = log_level.upper()

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None and ctx.invoked_subcommand not in REMOTE_COMMANDS:
        try:
            db = create_database(database_path=db_path)
        except SQLAlchemyError as e:
            click.echo(f"Error: Database connection failed: {e}", err=True)
            ctx.exit(1)
            return
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
serve.register_commands(cli)
export.register_commands(cli)
import_cmd.register_commands(cli)
budget.register_commands(cli)
dashboard.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
