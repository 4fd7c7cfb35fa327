"""CLI error handling helpers."""

import logging

import click

from fintrackr.domain.errors import DomainError, ServerError

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError) -> None:
    """Print a domain error to stderr and exit with status 1.

    Server faults are also logged with their traceback.
    """
    if isinstance(error, ServerError):
        logger.error("%s failed", ctx.command_path, exc_info=error)
    else:
        logger.debug("%s rejected: %s", ctx.command_path, error)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
