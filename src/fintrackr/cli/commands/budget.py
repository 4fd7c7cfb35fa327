"""Budget commands."""

import click

from fintrackr.cli.error_handling import handle_domain_error
from fintrackr.cli.user_resolution import resolve_user_or_exit
from fintrackr.domain.budget import BudgetService
from fintrackr.domain.entities import BudgetClassification, BudgetStatus
from fintrackr.domain.errors import DomainError


@click.group("budget")
def budget_group():
    """Manage monthly budgets."""
    pass


@budget_group.command("set")
@click.option("--user", "email", required=True, help="Email of the budget owner")
@click.option("--month", type=int, required=True, help="Month (1-12)")
@click.option("--year", type=int, required=True, help="Year")
@click.option("--amount", required=True, help="Spending cap for the month")
@click.pass_context
def set_budget(ctx, email: str, month: int, year: int, amount: str):
    """Create or overwrite the budget for a month."""
    db = ctx.obj["db"]
    user = resolve_user_or_exit(ctx, db, email)

    try:
        budget = BudgetService(db).set_budget(user.id, month, year, amount)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Budget for {budget.month:02d}/{budget.year} set to {budget.amount:.2f}")


@budget_group.command("status")
@click.option("--user", "email", required=True, help="Email of the budget owner")
@click.option("--month", type=int, help="Month (defaults to the current month)")
@click.option("--year", type=int, help="Year (defaults to the current year)")
@click.pass_context
def budget_status(ctx, email: str, month: int | None, year: int | None):
    """Show spending against the budget for a month."""
    db = ctx.obj["db"]
    user = resolve_user_or_exit(ctx, db, email)

    status = BudgetService(db).evaluate_current(user.id, month, year)
    for line in format_budget_status(status):
        click.echo(line)


def format_budget_status(status: BudgetStatus) -> list[str]:
    """Render a budget status as display lines."""
    lines = [f"Budget status for {status.month:02d}/{status.year}: {status.classification.value}"]
    lines.append(f"  Spent: {status.spent:.2f}")
    if status.classification == BudgetClassification.NO_BUDGET or status.budget is None:
        lines.append("  No budget set for this month")
        return lines
    lines.append(f"  Budget: {status.budget.amount:.2f}")
    lines.append(f"  Remaining: {status.remaining:.2f}")
    if status.percentage is not None:
        lines.append(f"  Used: {status.percentage}%")
    return lines


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group)
