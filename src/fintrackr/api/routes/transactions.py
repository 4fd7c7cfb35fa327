"""Transaction CRUD and CSV export/import routes."""

import time
from typing import Any

from fastapi import APIRouter, Body, Depends, Response

from fintrackr.api.deps import get_current_user, get_db
from fintrackr.api.schemas import (
    ImportRequest,
    ImportResponse,
    MessageResponse,
    TransactionCreate,
    TransactionOut,
)
from fintrackr.database.base import Database
from fintrackr.domain.csv_import import CSVImportService
from fintrackr.domain.entities import TransactionDraft, User
from fintrackr.domain.transaction import TransactionService

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get("", response_model=list[TransactionOut])
def list_transactions(
    db: Database = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    transactions = TransactionService(db).list_transactions(current_user.id)
    return [TransactionOut.from_entity(txn) for txn in transactions]


@router.post("", response_model=TransactionOut, status_code=201)
def create_transaction(
    body: TransactionCreate,
    db: Database = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    txn = TransactionService(db).create_transaction(
        owner_id=current_user.id,
        type=body.type,
        amount=body.amount,
        category=body.category,
        note=body.note,
        date=body.date,
    )
    return TransactionOut.from_entity(txn)


@router.get("/export")
def export_transactions(
    db: Database = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    csv_text = CSVImportService(db).export_csv(current_user.id)
    filename = f"transactions-{int(time.time() * 1000)}.csv"
    return Response(
        content=csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.post("/import", response_model=ImportResponse)
def import_transactions(
    body: ImportRequest,
    db: Database = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    drafts = [
        TransactionDraft(
            type=row.type,
            amount=row.amount,
            category=row.category,
            note=row.note if row.note is not None else "",
            date=row.date,
        )
        for row in body.transactions
    ]
    result = CSVImportService(db).import_drafts(current_user.id, drafts)
    return ImportResponse.from_result(result)


@router.put("/{transaction_id}", response_model=TransactionOut)
def update_transaction(
    transaction_id: int,
    patch: dict[str, Any] = Body(...),
    db: Database = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    txn = TransactionService(db).update_transaction(current_user.id, transaction_id, patch)
    return TransactionOut.from_entity(txn)


@router.delete("/{transaction_id}", response_model=MessageResponse)
def delete_transaction(
    transaction_id: int,
    db: Database = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    TransactionService(db).delete_transaction(current_user.id, transaction_id)
    return MessageResponse(message="Transaction deleted")
