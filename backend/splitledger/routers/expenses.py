"""Expenses: create, list, get, delete, clear, export."""
import csv
import io
import logging
import math
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from splitledger.database import get_db
from splitledger.models import Expense
from splitledger.schemas import ExpenseCreate, ExpenseResponse

router = APIRouter(prefix="/expenses", tags=["expenses"])

logger = logging.getLogger(__name__)


def _parse_participants(raw) -> list[str]:
    items = raw.split(",") if isinstance(raw, str) else raw
    return [p.strip() for p in items if p.strip()]


def _get_expense(db: Session, expense_id: str) -> Expense:
    expense = db.query(Expense).filter(Expense.id == expense_id).first()
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")
    return expense


@router.post("", response_model=ExpenseResponse)
def create_expense(data: ExpenseCreate, db: Session = Depends(get_db)):
    if not data.description.strip():
        raise HTTPException(status_code=400, detail="Description required")
    if not math.isfinite(data.amount) or data.amount <= 0:
        raise HTTPException(status_code=400, detail="Amount must be positive")
    if not data.payer.strip():
        raise HTTPException(status_code=400, detail="Payer required")
    participants = _parse_participants(data.participants)
    if not participants:
        raise HTTPException(status_code=400, detail="At least one participant required")

    expense = Expense(
        description=data.description.strip(),
        amount=data.amount,
        payer=data.payer.strip(),
        participants=participants,
        receipt_uri=data.receipt_uri,
    )
    db.add(expense)
    db.commit()
    db.refresh(expense)
    logger.info("Recorded expense %s: %.2f paid by %s", expense.id, expense.amount, expense.payer)
    return ExpenseResponse.model_validate(expense)


@router.get("", response_model=list[ExpenseResponse])
def list_expenses(
    search: Optional[str] = Query(None),
    person: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    q = db.query(Expense)
    if search:
        q = q.filter(Expense.description.ilike(f"%{search}%"))
    expenses = q.order_by(Expense.seq.desc()).all()

    if person:
        # Participants live in a JSON column, so match them here rather than in SQL.
        expenses = [e for e in expenses if e.payer == person or person in (e.participants or [])]
    return [ExpenseResponse.model_validate(e) for e in expenses[offset:offset + limit]]


@router.get("/export")
def export_expenses(db: Session = Depends(get_db)):
    expenses = db.query(Expense).order_by(Expense.seq.desc()).all()

    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["Date", "Description", "Amount", "Paid By", "Participants", "Receipt"])
    for e in expenses:
        date_str = e.created_at.strftime("%Y-%m-%d %H:%M") if e.created_at else ""
        writer.writerow([
            date_str,
            e.description,
            f"{e.amount:.2f}",
            e.payer,
            ", ".join(e.participants or []),
            e.receipt_uri or "",
        ])

    output.seek(0)
    return StreamingResponse(
        iter([output.getvalue()]),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=expenses.csv"},
    )


@router.get("/{expense_id}", response_model=ExpenseResponse)
def get_expense(expense_id: str, db: Session = Depends(get_db)):
    return ExpenseResponse.model_validate(_get_expense(db, expense_id))


@router.delete("/{expense_id}", status_code=204)
def delete_expense(expense_id: str, db: Session = Depends(get_db)):
    expense = _get_expense(db, expense_id)
    db.delete(expense)
    db.commit()
    logger.info("Deleted expense %s", expense_id)


@router.delete("", status_code=204)
def clear_expenses(db: Session = Depends(get_db)):
    count = db.query(Expense).delete()
    db.commit()
    logger.info("Cleared %d expenses", count)
