"""CSV import command."""

import click

from fintrackr.cli.user_resolution import resolve_user_or_exit
from fintrackr.domain.csv_import import CSVImportService


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--user", "email", required=True, help="Email of the user to import for")
@click.pass_context
def import_csv(ctx, csv_file: str, email: str):
    """Import transactions from a CSV file.

    The header row decides the column order; Date, Type, Amount, Category
    and Note are recognised. Rows without amount, category or type are
    skipped.
    """
    db = ctx.obj["db"]
    user = resolve_user_or_exit(ctx, db, email)

    with open(csv_file, "r", encoding="utf-8-sig") as f:
        csv_text = f.read()

    result = CSVImportService(db).import_csv_text(user.id, csv_text)
    click.echo(f"\nImport complete:")
    click.echo(f"  Imported: {result.imported_count} transactions")
    if result.errors:
        click.echo(f"  Errors: {len(result.errors)}")
        for error in result.errors:
            click.echo(f"    {error}", err=True)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
