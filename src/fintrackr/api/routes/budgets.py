"""Budget routes."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from fintrackr.api.deps import get_current_user, get_db
from fintrackr.api.schemas import BudgetCreate, BudgetOut, BudgetStatusOut
from fintrackr.database.base import Database
from fintrackr.domain.budget import BudgetService
from fintrackr.domain.entities import User

router = APIRouter(prefix="/budgets", tags=["budgets"])


@router.post("", response_model=BudgetOut)
def set_budget(
    body: BudgetCreate,
    db: Database = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    budget = BudgetService(db).set_budget(current_user.id, body.month, body.year, body.amount)
    return BudgetOut.from_entity(budget)


@router.get("", response_model=list[BudgetOut])
def list_budgets(
    db: Database = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return [BudgetOut.from_entity(b) for b in BudgetService(db).list_budgets(current_user.id)]


@router.get("/current", response_model=BudgetStatusOut, response_model_exclude_none=True)
def current_budget(
    month: Optional[int] = Query(None),
    year: Optional[int] = Query(None),
    db: Database = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Budget status for the current month, or for ``month``/``year`` when given."""
    status = BudgetService(db).evaluate_current(current_user.id, month, year)
    return BudgetStatusOut.from_entity(status)
