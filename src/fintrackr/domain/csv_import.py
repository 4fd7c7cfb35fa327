"""CSV import and export domain service."""

import logging
from typing import Iterable

from fintrackr.database.base import Database
from fintrackr.domain.csv_codec import decode_transactions, encode_transactions
from fintrackr.domain.entities import ImportResult, TransactionDraft
from fintrackr.domain.errors import NOTHING_TO_EXPORT, NotFoundError, import_row_failed
from fintrackr.domain.transaction import TransactionService

logger = logging.getLogger(__name__)


class CSVImportService:
    """Service for importing and exporting an owner's transactions as CSV."""

    def __init__(self, db: Database):
        """Initialize CSV import service.

        Args:
            db: Database instance
        """
        self.db = db
        self.transaction_service = TransactionService(db)

    def import_drafts(self, owner_id: int, drafts: Iterable[TransactionDraft]) -> ImportResult:
        """Insert drafts one at a time.

        A row that fails validation or storage is recorded in ``errors`` and
        does not stop the remaining rows.

        Args:
            owner_id: Owning user ID
            drafts: Drafts in input order

        Returns:
            ImportResult with the imported count and one error per failed row
        """
        imported = 0
        errors = []

        for row_num, draft in enumerate(drafts, start=1):
            try:
                self.transaction_service.create_transaction(
                    owner_id=owner_id,
                    type=draft.type,
                    amount=draft.amount,
                    category=draft.category,
                    note=draft.note,
                    date=draft.date,
                )
                imported += 1
            except Exception as e:
                logger.warning("Import row %d for user %d failed: %s", row_num, owner_id, e)
                errors.append(import_row_failed(draft.category, draft.amount))
                continue

        return ImportResult(imported_count=imported, errors=tuple(errors))

    def import_csv_text(self, owner_id: int, csv_text: str) -> ImportResult:
        """Decode CSV text and import the accepted rows."""
        return self.import_drafts(owner_id, decode_transactions(csv_text))

    def export_csv(self, owner_id: int) -> str:
        """Export all of an owner's transactions, newest first.

        Raises:
            NotFoundError: If the owner has no transactions
        """
        transactions = self.transaction_service.list_transactions(owner_id)
        if not transactions:
            raise NotFoundError(NOTHING_TO_EXPORT)
        logger.info("Exporting %d transactions for user %d", len(transactions), owner_id)
        return encode_transactions(transactions)
