"""Domain tests for CSV import and export."""

import pytest
from datetime import datetime
from decimal import Decimal

from fintrackr.domain.csv_codec import EXPORT_HEADER
from fintrackr.domain.entities import TransactionDraft, TransactionKind
from fintrackr.domain.errors import NotFoundError


def _draft(category, amount, type="expense", date="2024-02-01T00:00:00"):
    return TransactionDraft(type=type, amount=amount, category=category, date=date)


def test_import_result_contract(import_service, sample_user):
    """Import returns the count and an empty error list on success."""
    result = import_service.import_drafts(
        sample_user.id, [_draft("Food", "10"), _draft("Rent", "900")]
    )

    assert result.imported_count == 2
    assert result.errors == ()
    assert result.message == "Imported 2 transactions successfully"


def test_failed_row_does_not_abort_import(import_service, transaction_service, sample_user):
    """A failing middle row is reported and the rows around it are stored."""
    drafts = [
        _draft("First", "10"),
        _draft("Second", "-5"),
        _draft("Third", "30"),
    ]

    result = import_service.import_drafts(sample_user.id, drafts)

    assert result.imported_count == 2
    assert result.errors == ("Failed to import: Second - -5",)
    stored = {t.category for t in transaction_service.list_transactions(sample_user.id)}
    assert stored == {"First", "Third"}


def test_store_failure_is_per_row(import_service, transaction_service, sample_user, monkeypatch):
    """A storage error on one row is caught like a validation error."""
    original = import_service.db.create_transaction
    calls = {"count": 0}

    def flaky_create(**kwargs):
        calls["count"] += 1
        if calls["count"] == 2:
            raise RuntimeError("constraint violated")
        return original(**kwargs)

    monkeypatch.setattr(import_service.db, "create_transaction", flaky_create)

    result = import_service.import_drafts(
        sample_user.id, [_draft("A", "1"), _draft("B", "2"), _draft("C", "3")]
    )

    assert result.imported_count == 2
    assert len(result.errors) == 1
    assert "B - 2" in result.errors[0]


def test_unparseable_date_fails_the_row(import_service, sample_user):
    """Drafts sent directly with a bad date fail individually."""
    result = import_service.import_drafts(
        sample_user.id, [_draft("Food", "10", date="yesterday-ish")]
    )

    assert result.imported_count == 0
    assert len(result.errors) == 1


def test_import_csv_text(import_service, transaction_service, sample_user, fixtures_dir):
    """Accepted rows of a CSV file are stored, skipped rows are not errors."""
    csv_text = (fixtures_dir / "sample_transactions.csv").read_text(encoding="utf-8")

    result = import_service.import_csv_text(sample_user.id, csv_text)

    assert result.imported_count == 5
    assert result.errors == ()

    stored = {t.category: t for t in transaction_service.list_transactions(sample_user.id)}
    assert set(stored) == {"Groceries", "Salary", "Transport", "Misc", "Coffee"}
    assert stored["Salary"].kind == TransactionKind.INCOME
    assert stored["Misc"].kind == TransactionKind.EXPENSE
    assert stored["Transport"].note == "Train pass, monthly"
    assert stored["Groceries"].occurred_at == datetime(2024, 1, 5)
    assert stored["Coffee"].amount == Decimal("7.5")


def test_export_csv(import_service, transaction_service, sample_user):
    """Export lists the owner's transactions newest first."""
    transaction_service.create_transaction(
        owner_id=sample_user.id, type="expense", amount=5, category="Old", date=datetime(2023, 1, 1)
    )
    transaction_service.create_transaction(
        owner_id=sample_user.id, type="income", amount=7, category="New", date=datetime(2024, 1, 1)
    )

    lines = import_service.export_csv(sample_user.id).split("\n")

    assert lines[0] == EXPORT_HEADER
    assert '"New"' in lines[1]
    assert '"Old"' in lines[2]


def test_export_without_transactions(import_service, sample_user):
    """Nothing to export is reported as not found."""
    with pytest.raises(NotFoundError) as excinfo:
        import_service.export_csv(sample_user.id)

    assert str(excinfo.value) == "No transactions found to export"
