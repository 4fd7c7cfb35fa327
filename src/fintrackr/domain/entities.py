"""Domain model entities for fintrackr.

These are pure data classes representing business concepts, independent of
database schema. The persistence layer converts its rows into these through
the mappers module, and the API serializes them through pydantic schemas.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


class TransactionKind(str, Enum):
    """Direction of money movement for a transaction."""

    INCOME = "income"
    EXPENSE = "expense"


class BudgetClassification(str, Enum):
    """Budget-status tier for a month."""

    NO_BUDGET = "no-budget"
    OK = "ok"
    WARNING = "warning"
    OVER_BUDGET = "over-budget"


@dataclass(frozen=True)
class User:
    """Registered user. Never carries the password hash outside the store."""

    id: int
    name: str
    email: str
    created_at: datetime
    last_login: Optional[datetime] = None


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: int
    owner_id: int
    kind: TransactionKind
    amount: Decimal
    category: str
    note: str
    occurred_at: datetime
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Budget:
    """Monthly spending cap, unique per (owner, month, year)."""

    id: int
    owner_id: int
    month: int
    year: int
    amount: Decimal
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class BudgetStatus:
    """Derived spend-to-date for one month compared against its budget.

    ``remaining`` and ``percentage`` are ``None`` when no budget exists.
    ``percentage`` is also ``None`` for a zero budget, where the ratio is
    undefined.
    """

    classification: BudgetClassification
    spent: Decimal
    month: int
    year: int
    budget: Optional[Budget] = None
    remaining: Optional[Decimal] = None
    percentage: Optional[int] = None


@dataclass(frozen=True)
class TransactionDraft:
    """Unpersisted transaction candidate, as decoded from CSV or an import request.

    Values are kept raw; parsing and validation happen when the draft is
    inserted so that failures can be reported per row.
    """

    type: Any
    amount: Any
    category: Any
    note: Any = ""
    date: Any = None


@dataclass(frozen=True)
class ImportResult:
    """Outcome of a sequential import of drafts."""

    imported_count: int
    errors: tuple[str, ...] = field(default_factory=tuple)

    @property
    def message(self) -> str:
        return f"Imported {self.imported_count} transactions successfully"
