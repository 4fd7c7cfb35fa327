"""Derived dashboard state for a client holding the owner's transactions.

The state container is immutable. Reducers return a new state, and
``select_view`` turns a state into everything a dashboard renders: the
filtered list, income/expense/balance totals, and expenses per category
for charting. Nothing here is a source of truth; the state is rebuilt from
the last fetched snapshot plus local edits.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from fintrackr.domain.entities import TransactionKind


@dataclass(frozen=True)
class TransactionRecord:
    """A transaction as the client sees it (decoded from the API)."""

    id: int
    type: str
    amount: Decimal
    category: str
    note: str
    date: datetime


@dataclass(frozen=True)
class Filters:
    """Dashboard filters. Empty values match everything.

    ``category`` and ``search`` are case-insensitive substring matches;
    ``search`` looks at both the category and the note.
    """

    month: Optional[int] = None
    year: Optional[int] = None
    category: str = ""
    search: str = ""


@dataclass(frozen=True)
class DashboardState:
    transactions: tuple[TransactionRecord, ...] = ()
    filters: Filters = field(default_factory=Filters)


@dataclass(frozen=True)
class CategoryTotal:
    category: str
    amount: Decimal


@dataclass(frozen=True)
class DashboardView:
    transactions: tuple[TransactionRecord, ...]
    total_income: Decimal
    total_expense: Decimal
    balance: Decimal
    expenses_by_category: tuple[CategoryTotal, ...]


# Reducers

def load_transactions(state: DashboardState, transactions: Iterable[TransactionRecord]) -> DashboardState:
    """Replace the snapshot with freshly fetched transactions."""
    return replace(state, transactions=tuple(transactions))


def add_transaction(state: DashboardState, txn: TransactionRecord) -> DashboardState:
    """Add a newly created transaction at the top of the list."""
    return replace(state, transactions=(txn,) + state.transactions)


def replace_transaction(state: DashboardState, txn: TransactionRecord) -> DashboardState:
    """Swap in an updated transaction, matched by id."""
    return replace(
        state,
        transactions=tuple(txn if t.id == txn.id else t for t in state.transactions),
    )


def remove_transaction(state: DashboardState, transaction_id: int) -> DashboardState:
    """Drop a deleted transaction."""
    return replace(
        state,
        transactions=tuple(t for t in state.transactions if t.id != transaction_id),
    )


def set_filters(state: DashboardState, filters: Filters) -> DashboardState:
    return replace(state, filters=filters)


def clear_filters(state: DashboardState) -> DashboardState:
    return replace(state, filters=Filters())


# Selectors

def matches(txn: TransactionRecord, filters: Filters) -> bool:
    """Check a transaction against the filters."""
    if filters.month and txn.date.month != filters.month:
        return False
    if filters.year and txn.date.year != filters.year:
        return False
    if filters.category and filters.category.lower() not in txn.category.lower():
        return False
    if filters.search:
        needle = filters.search.lower()
        in_category = needle in txn.category.lower()
        in_note = bool(txn.note) and needle in txn.note.lower()
        if not in_category and not in_note:
            return False
    return True


def filter_transactions(
    transactions: Iterable[TransactionRecord], filters: Filters
) -> tuple[TransactionRecord, ...]:
    return tuple(t for t in transactions if matches(t, filters))


def category_expenses(transactions: Iterable[TransactionRecord]) -> tuple[CategoryTotal, ...]:
    """Sum expenses per category, in order of first appearance."""
    totals: dict[str, Decimal] = {}
    for txn in transactions:
        if txn.type == TransactionKind.EXPENSE.value:
            totals[txn.category] = totals.get(txn.category, Decimal("0")) + txn.amount
    return tuple(CategoryTotal(category=name, amount=amount) for name, amount in totals.items())


def select_view(state: DashboardState) -> DashboardView:
    """Compute the dashboard view for the current state."""
    visible = filter_transactions(state.transactions, state.filters)

    total_income = Decimal("0")
    total_expense = Decimal("0")
    for txn in visible:
        if txn.type == TransactionKind.INCOME.value:
            total_income += txn.amount
        else:
            total_expense += txn.amount

    return DashboardView(
        transactions=visible,
        total_income=total_income,
        total_expense=total_expense,
        balance=total_income - total_expense,
        expenses_by_category=category_expenses(visible),
    )
