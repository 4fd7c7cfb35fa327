"""CSV export command."""

import click

from fintrackr.cli.error_handling import handle_domain_error
from fintrackr.cli.user_resolution import resolve_user_or_exit
from fintrackr.domain.csv_import import CSVImportService
from fintrackr.domain.errors import DomainError


@click.command("export")
@click.option("--user", "email", required=True, help="Email of the user to export")
@click.option("-o", "--output", type=click.Path(dir_okay=False, writable=True), help="Write to file instead of stdout")
@click.pass_context
def export_csv(ctx, email: str, output: str | None):
    """Export a user's transactions as CSV."""
    db = ctx.obj["db"]
    user = resolve_user_or_exit(ctx, db, email)

    try:
        csv_text = CSVImportService(db).export_csv(user.id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if output is None:
        click.echo(csv_text)
    else:
        with open(output, "w", encoding="utf-8", newline="") as f:
            f.write(csv_text)
        row_count = csv_text.count("\n")
        click.echo(f"Exported {row_count} transactions to {output}")


def register_commands(cli):
    """Register export command with main CLI."""
    cli.add_command(export_csv)
