"""Transaction domain service."""

from typing import Any, Mapping, Optional
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from fintrackr.database.base import Database
from fintrackr.domain.entities import Transaction as TransactionEntity, TransactionKind
from fintrackr.domain.errors import (
    NotFoundError,
    ServerError,
    ValidationError,
    TRANSACTION_NOT_FOUND,
    invalid_transaction_type,
    missing_field,
    negative_amount,
    sub_cent_amount,
)
from fintrackr.utils.amount_parser import parse_amount
from fintrackr.utils.date_parser import parse_datetime

CENT = Decimal("0.01")


def validate_kind(value: Any) -> TransactionKind:
    """Validate a transaction type ("income" or "expense")."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(missing_field("type"))
    try:
        return TransactionKind(str(value).strip())
    except ValueError:
        raise ValidationError(invalid_transaction_type(value))


def validate_amount(value: Any) -> Decimal:
    """Validate a non-negative amount given as number or string."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(missing_field("amount"))
    try:
        amount = parse_amount(value)
    except ValueError as e:
        raise ValidationError(str(e))
    if amount < 0:
        raise ValidationError(negative_amount("amount", value))
    try:
        whole_cents = amount == amount.quantize(CENT)
    except InvalidOperation:
        whole_cents = False
    if not whole_cents:
        raise ValidationError(sub_cent_amount("amount", value))
    return amount


def validate_note(value: Any) -> str:
    """Normalize an optional note to text."""
    return "" if value is None else str(value)


def validate_category(value: Any) -> str:
    """Validate a required, non-empty category label."""
    if value is None or not str(value).strip():
        raise ValidationError(missing_field("category"))
    return str(value).strip()


def validate_date(value: Any) -> datetime:
    """Validate an occurred-at value; None means now.

    Numbers are epoch milliseconds, as sent by JavaScript clients.
    """
    if value is None or value == "":
        return datetime.now()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000)
        except (OverflowError, OSError, ValueError) as e:
            raise ValidationError(f"Could not parse date '{value}': {e}")
    if isinstance(value, (date, datetime)):
        return parse_datetime(value)
    try:
        return parse_datetime(str(value))
    except ValueError as e:
        raise ValidationError(str(e))


class TransactionService:
    """Service for managing an owner's transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(
        self,
        owner_id: int,
        type: Any,
        amount: Any,
        category: Any,
        note: Any = None,
        date: Any = None,
    ) -> TransactionEntity:
        """Create a transaction.

        Args:
            owner_id: Owning user ID
            type: "income" or "expense"
            amount: Non-negative amount (number or string)
            category: Category label
            note: Optional free text
            date: Optional occurred-at; defaults to now

        Returns:
            The stored transaction

        Raises:
            ValidationError: If a required field is missing or malformed
        """
        kind = validate_kind(type)
        txn_amount = validate_amount(amount)
        txn_category = validate_category(category)
        occurred_at = validate_date(date)

        transaction_id = self.db.create_transaction(
            owner_id=owner_id,
            kind=kind,
            amount=txn_amount,
            category=txn_category,
            note=validate_note(note),
            occurred_at=occurred_at,
        )
        txn = self.db.get_transaction(owner_id, transaction_id)
        if txn is None:
            raise ServerError(f"Transaction {transaction_id} was not found after insert")
        return txn

    def get_transaction(self, owner_id: int, transaction_id: int) -> Optional[TransactionEntity]:
        """Get an owner's transaction by ID, or None."""
        return self.db.get_transaction(owner_id, transaction_id)

    def list_transactions(self, owner_id: int) -> list[TransactionEntity]:
        """List all of an owner's transactions, newest first."""
        return self.db.list_transactions(owner_id)

    def update_transaction(
        self, owner_id: int, transaction_id: int, patch: Mapping[str, Any]
    ) -> TransactionEntity:
        """Update transaction fields.

        Only ``type``, ``amount``, ``category``, ``note`` and ``date`` are
        applied; any other key (including ``id`` and ``userId``) is ignored.

        Args:
            owner_id: Owning user ID
            transaction_id: Transaction ID to update
            patch: Partial transaction

        Returns:
            The updated transaction

        Raises:
            NotFoundError: If the transaction doesn't exist for this owner
            ValidationError: If a supplied field is malformed
        """
        fields: dict[str, Any] = {}
        if "type" in patch:
            fields["kind"] = validate_kind(patch["type"])
        if "amount" in patch:
            fields["amount"] = validate_amount(patch["amount"])
        if "category" in patch:
            fields["category"] = validate_category(patch["category"])
        if "note" in patch:
            fields["note"] = validate_note(patch["note"])
        if "date" in patch:
            fields["occurred_at"] = validate_date(patch["date"])

        txn = self.db.update_transaction(owner_id, transaction_id, fields)
        if txn is None:
            raise NotFoundError(TRANSACTION_NOT_FOUND)
        return txn

    def delete_transaction(self, owner_id: int, transaction_id: int) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If the transaction doesn't exist for this owner
        """
        if not self.db.delete_transaction(owner_id, transaction_id):
            raise NotFoundError(TRANSACTION_NOT_FOUND)
