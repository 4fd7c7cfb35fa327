"""Request and response schemas for the JSON API.

Request bodies are intentionally loose: every field is optional and
untyped so that missing or malformed values reach the domain validators
and are reported the same way as other server-side failures.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from fintrackr.domain.entities import Budget, BudgetStatus, ImportResult, Transaction, User


# ----------------------------
# AUTH SCHEMAS
# ----------------------------

class RegisterRequest(BaseModel):
    name: Any = None
    email: Any = None
    password: Any = None


class LoginRequest(BaseModel):
    email: Any = None
    password: Any = None


class UserOut(BaseModel):
    id: int
    name: str
    email: str
    createdAt: datetime
    lastLogin: Optional[datetime] = None

    @classmethod
    def from_entity(cls, user: User) -> "UserOut":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            createdAt=user.created_at,
            lastLogin=user.last_login,
        )


class AuthResponse(BaseModel):
    token: str
    user: UserOut


class MeResponse(BaseModel):
    user: UserOut


# ----------------------------
# TRANSACTION SCHEMAS
# ----------------------------

class TransactionCreate(BaseModel):
    type: Any = None
    amount: Any = None
    category: Any = None
    note: Any = None
    date: Any = None


class TransactionOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    record_id: int = Field(serialization_alias="_id")
    id: int
    userId: int
    type: str
    amount: float
    category: str
    note: str
    date: datetime
    createdAt: datetime
    updatedAt: datetime

    @classmethod
    def from_entity(cls, txn: Transaction) -> "TransactionOut":
        return cls(
            record_id=txn.id,
            id=txn.id,
            userId=txn.owner_id,
            type=txn.kind.value,
            amount=float(txn.amount),
            category=txn.category,
            note=txn.note,
            date=txn.occurred_at,
            createdAt=txn.created_at,
            updatedAt=txn.updated_at,
        )


class ImportRow(BaseModel):
    type: Any = None
    amount: Any = None
    category: Any = None
    note: Any = None
    date: Any = None


class ImportRequest(BaseModel):
    transactions: list[ImportRow]


class ImportResponse(BaseModel):
    message: str
    importedCount: int
    errors: list[str]

    @classmethod
    def from_result(cls, result: ImportResult) -> "ImportResponse":
        return cls(
            message=result.message,
            importedCount=result.imported_count,
            errors=list(result.errors),
        )


class MessageResponse(BaseModel):
    message: str


# ----------------------------
# BUDGET SCHEMAS
# ----------------------------

class BudgetCreate(BaseModel):
    month: Any = None
    year: Any = None
    amount: Any = None


class BudgetOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    record_id: int = Field(serialization_alias="_id")
    id: int
    userId: int
    month: int
    year: int
    amount: float
    createdAt: datetime
    updatedAt: datetime

    @classmethod
    def from_entity(cls, budget: Budget) -> "BudgetOut":
        return cls(
            record_id=budget.id,
            id=budget.id,
            userId=budget.owner_id,
            month=budget.month,
            year=budget.year,
            amount=float(budget.amount),
            createdAt=budget.created_at,
            updatedAt=budget.updated_at,
        )


class BudgetStatusOut(BaseModel):
    """Budget status; ``status`` carries the classification."""

    status: str
    spent: float
    month: int
    year: int
    budget: Optional[BudgetOut] = None
    remaining: Optional[float] = None
    percentage: Optional[int] = None

    @classmethod
    def from_entity(cls, status: BudgetStatus) -> "BudgetStatusOut":
        return cls(
            status=status.classification.value,
            spent=float(status.spent),
            month=status.month,
            year=status.year,
            budget=BudgetOut.from_entity(status.budget) if status.budget else None,
            remaining=float(status.remaining) if status.remaining is not None else None,
            percentage=status.percentage,
        )
