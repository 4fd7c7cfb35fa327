"""Budget domain service and monthly budget-status evaluation."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional

from fintrackr.database.base import Database
from fintrackr.domain.entities import (
    Budget,
    BudgetClassification,
    BudgetStatus,
    TransactionKind,
)
from fintrackr.domain.errors import ValidationError, missing_field, month_out_of_range
from fintrackr.domain.transaction import validate_amount
from fintrackr.utils.date_parser import current_month, month_bounds

WARNING_PERCENTAGE = 80
OVER_BUDGET_PERCENTAGE = 100


def spending_percentage(spent: Decimal, budget_amount: Decimal) -> Optional[int]:
    """Return spent as a whole-number percentage of the budget, rounded half up.

    Returns None for a zero budget, where the ratio is undefined.
    """
    if budget_amount == 0:
        return None
    ratio = spent / budget_amount * 100
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def classify(spent: Decimal, budget_amount: Decimal) -> BudgetClassification:
    """Classify spending against a budget.

    Spending of 100% or more is over budget, 80% or more is a warning. The
    thresholds apply to the exact ratio, not the rounded percentage, so 799
    of 1000 is still ok. A zero budget is over budget as soon as anything
    has been spent.
    """
    if budget_amount == 0:
        return BudgetClassification.OVER_BUDGET if spent > 0 else BudgetClassification.OK
    ratio = spent / budget_amount * 100
    if ratio >= OVER_BUDGET_PERCENTAGE:
        return BudgetClassification.OVER_BUDGET
    if ratio >= WARNING_PERCENTAGE:
        return BudgetClassification.WARNING
    return BudgetClassification.OK


def _validate_int(name: str, value: Any) -> int:
    if value is None or value == "":
        raise ValidationError(missing_field(name))
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be an integer (got {value!r})")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be an integer (got {value!r})")


class BudgetService:
    """Service for monthly budgets."""

    def __init__(self, db: Database):
        """Initialize budget service.

        Args:
            db: Database instance
        """
        self.db = db

    def set_budget(self, owner_id: int, month: Any, year: Any, amount: Any) -> Budget:
        """Create or overwrite the budget for (owner, month, year).

        Args:
            owner_id: Owning user ID
            month: Month number, 1..12
            year: Calendar year
            amount: Non-negative spending cap

        Returns:
            The stored budget

        Raises:
            ValidationError: If month, year or amount is missing or malformed
        """
        budget_month = _validate_int("month", month)
        budget_year = _validate_int("year", year)
        if not 1 <= budget_month <= 12:
            raise ValidationError(month_out_of_range(budget_month))
        if budget_year < 1:
            raise ValidationError(f"year must be positive (got {budget_year})")
        budget_amount = validate_amount(amount)

        return self.db.upsert_budget(owner_id, budget_month, budget_year, budget_amount)

    def get_budget(self, owner_id: int, month: int, year: int) -> Optional[Budget]:
        """Get the budget for (owner, month, year), or None."""
        return self.db.get_budget(owner_id, month, year)

    def list_budgets(self, owner_id: int) -> list[Budget]:
        """List an owner's budgets, most recent period first."""
        return self.db.list_budgets(owner_id)

    def monthly_spent(self, owner_id: int, month: int, year: int) -> Decimal:
        """Sum the owner's expenses whose date falls inside the month (inclusive)."""
        start, end = month_bounds(year, month)
        expenses = self.db.list_transactions(
            owner_id, kind=TransactionKind.EXPENSE, start=start, end=end
        )
        return sum((txn.amount for txn in expenses), Decimal("0"))

    def evaluate(self, owner_id: int, month: int, year: int) -> BudgetStatus:
        """Compute spend-to-date for a month and classify it against its budget.

        Month and year are not range-checked: out-of-range months roll over
        through the date arithmetic and simply match whatever falls in the
        resulting window.

        Args:
            owner_id: Owning user ID
            month: Month number
            year: Calendar year

        Returns:
            BudgetStatus; ``remaining`` and ``percentage`` are None without a budget
        """
        budget = self.db.get_budget(owner_id, month, year)
        spent = self.monthly_spent(owner_id, month, year)

        if budget is None:
            return BudgetStatus(
                classification=BudgetClassification.NO_BUDGET,
                spent=spent,
                month=month,
                year=year,
            )

        percentage = spending_percentage(spent, budget.amount)
        return BudgetStatus(
            classification=classify(spent, budget.amount),
            spent=spent,
            month=month,
            year=year,
            budget=budget,
            remaining=budget.amount - spent,
            percentage=percentage,
        )

    def evaluate_current(
        self, owner_id: int, month: Optional[int] = None, year: Optional[int] = None
    ) -> BudgetStatus:
        """Evaluate a month, defaulting month and year to the current local date."""
        now_month, now_year = current_month()
        return self.evaluate(
            owner_id,
            month if month is not None else now_month,
            year if year is not None else now_year,
        )
