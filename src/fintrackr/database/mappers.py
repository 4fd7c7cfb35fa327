"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic so that the domain entities stay
stable when the table layout changes.
"""

from fintrackr.domain import entities as domain
from fintrackr.database.models import (
    User as ORMUser,
    Transaction as ORMTransaction,
    Budget as ORMBudget,
)


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        name=orm_user.name,
        email=orm_user.email,
        created_at=orm_user.created_at,
        last_login=orm_user.last_login,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        owner_id=orm_transaction.user_id,
        kind=domain.TransactionKind(orm_transaction.type),
        amount=orm_transaction.amount,
        category=orm_transaction.category,
        note=orm_transaction.note or "",
        occurred_at=orm_transaction.date,
        created_at=orm_transaction.created_at,
        updated_at=orm_transaction.updated_at,
    )


def budget_to_domain(orm_budget: ORMBudget) -> domain.Budget:
    """Convert SQLAlchemy Budget model to domain Budget entity."""
    return domain.Budget(
        id=orm_budget.id,
        owner_id=orm_budget.user_id,
        month=orm_budget.month,
        year=orm_budget.year,
        amount=orm_budget.amount,
        created_at=orm_budget.created_at,
        updated_at=orm_budget.updated_at,
    )
