"""CLI helpers for resolving a user by email."""

import click

from fintrackr.cli.error_handling import handle_domain_error
from fintrackr.database.base import Database
from fintrackr.domain.entities import User
from fintrackr.domain.errors import NotFoundError


def resolve_user_or_exit(ctx: click.Context, db: Database, email: str) -> User:
    """Look up the user owning ``email`` (case-insensitive), or exit with an error."""
    user = db.get_user_by_email(email)
    if user is None:
        handle_domain_error(ctx, NotFoundError(f"User '{email}' not found"))
    return user
