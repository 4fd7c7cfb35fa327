"""Abstract database interface.

Every transaction and budget operation takes the owner's user ID and is
scoped by it: a record owned by somebody else behaves exactly like a
record that does not exist.
"""

from abc import ABC, abstractmethod
from typing import Optional, Any
from datetime import datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from fintrackr.domain.entities import User, Transaction, Budget, TransactionKind


class Database(ABC):
    """Abstract database interface for fintrackr."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # User operations
    @abstractmethod
    def create_user(self, name: str, email: str, password_hash: str) -> int:
        """Create a user. Returns user ID."""
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by (lowercased) email."""
        pass

    @abstractmethod
    def get_password_hash(self, user_id: int) -> Optional[str]:
        """Get the stored password hash for a user."""
        pass

    @abstractmethod
    def update_last_login(self, user_id: int, when: datetime) -> None:
        """Record a successful login."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        owner_id: int,
        kind: TransactionKind,
        amount: Decimal,
        category: str,
        note: str,
        occurred_at: datetime,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, owner_id: int, transaction_id: int) -> Optional[Transaction]:
        """Get an owner's transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        owner_id: int,
        kind: Optional[TransactionKind] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[Transaction]:
        """List an owner's transactions, newest first.

        Args:
            owner_id: Owning user ID
            kind: Optional income/expense filter
            start: Optional inclusive lower bound on occurred_at
            end: Optional inclusive upper bound on occurred_at
        """
        pass

    @abstractmethod
    def update_transaction(
        self, owner_id: int, transaction_id: int, fields: dict[str, Any]
    ) -> Optional[Transaction]:
        """Apply already-validated field values. Returns None if not found for owner."""
        pass

    @abstractmethod
    def delete_transaction(self, owner_id: int, transaction_id: int) -> bool:
        """Delete an owner's transaction. Returns False if nothing was deleted."""
        pass

    # Budget operations
    @abstractmethod
    def upsert_budget(self, owner_id: int, month: int, year: int, amount: Decimal) -> Budget:
        """Insert a budget or overwrite the amount of the existing one for the key."""
        pass

    @abstractmethod
    def get_budget(self, owner_id: int, month: int, year: int) -> Optional[Budget]:
        """Get the budget for (owner, month, year)."""
        pass

    @abstractmethod
    def list_budgets(self, owner_id: int) -> list[Budget]:
        """List an owner's budgets, most recent period first."""
        pass
