"""Dashboard command: a terminal client for the JSON API."""

from decimal import Decimal
from typing import Any

import click

from fintrackr.client.api import ApiClient
from fintrackr.client.view import (
    DashboardState,
    DashboardView,
    Filters,
    load_transactions,
    select_view,
    set_filters,
)
from fintrackr.domain.errors import AuthError, DomainError

BAR_WIDTH = 30


def render_chart(view: DashboardView) -> list[str]:
    """Render expenses by category as horizontal bars."""
    if not view.expenses_by_category:
        return ["No expense data to show chart"]

    largest = max(item.amount for item in view.expenses_by_category)
    name_width = max(len(item.category) for item in view.expenses_by_category)
    lines = []
    for item in view.expenses_by_category:
        length = int(item.amount / largest * BAR_WIDTH) if largest > 0 else 0
        lines.append(f"  {item.category:<{name_width}}  {'#' * length:<{BAR_WIDTH}}  {item.amount:.2f}")
    return lines


def render_budget(status: dict[str, Any]) -> list[str]:
    if status.get("status") == "no-budget":
        return [f"Budget: not set (spent {Decimal(str(status['spent'])):.2f})"]
    line = (
        f"Budget: {status['status']} - spent {Decimal(str(status['spent'])):.2f}"
        f" of {Decimal(str(status['budget']['amount'])):.2f}"
        f", remaining {Decimal(str(status['remaining'])):.2f}"
    )
    if status.get("percentage") is not None:
        line += f" ({status['percentage']}%)"
    return [line]


def render_dashboard(view: DashboardView, budget_status: dict[str, Any] | None = None) -> list[str]:
    """Render the summary, chart, budget and transaction list."""
    lines = [
        f"Income:  {view.total_income:.2f}",
        f"Expense: {view.total_expense:.2f}",
        f"Balance: {view.balance:.2f}",
        "",
        "Expenses by category:",
    ]
    lines.extend(render_chart(view))
    if budget_status is not None:
        lines.append("")
        lines.extend(render_budget(budget_status))
    lines.append("")

    if not view.transactions:
        lines.append("No transactions found.")
        return lines

    lines.append(f"{'Date':<10}  {'Type':<7}  {'Amount':>10}  {'Category':<20}  Note")
    for txn in view.transactions:
        lines.append(
            f"{txn.date.strftime('%Y-%m-%d'):<10}  {txn.type:<7}  {txn.amount:>10.2f}  "
            f"{txn.category[:20]:<20}  {txn.note}"
        )
    return lines


@click.command("dashboard")
@click.option(
    "--api-url",
    default="http://127.0.0.1:5000/api",
    show_default=True,
    envvar="FINTRACKR_API_URL",
    help="API base URL",
)
@click.option("--email", required=True, help="Login email")
@click.option("--password", prompt=True, hide_input=True, help="Login password")
@click.option("--month", type=click.IntRange(1, 12), help="Only show this month")
@click.option("--year", type=int, help="Only show this year")
@click.option("--category", default="", help="Category substring filter")
@click.option("--search", default="", help="Search category and note")
@click.pass_context
def dashboard(ctx, api_url: str, email: str, password: str, month, year, category: str, search: str):
    """Log in to the API and show a filtered dashboard.

    The budget line always reflects the selected month (or the current
    month when none is given).
    """
    client = ApiClient(api_url, client=ctx.obj.get("http_client"))
    try:
        client.login(email, password)
        state = load_transactions(DashboardState(), client.list_transactions())
        state = set_filters(state, Filters(month=month, year=year, category=category, search=search))
        budget_status = client.budget_status(month=month, year=year if month is not None else None)
    except AuthError as e:
        click.echo(f"Error: {e} (logged out)", err=True)
        ctx.exit(1)
        return
    except DomainError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
        return

    for line in render_dashboard(select_view(state), budget_status):
        click.echo(line)


def register_commands(cli):
    """Register dashboard command with main CLI."""
    cli.add_command(dashboard)
