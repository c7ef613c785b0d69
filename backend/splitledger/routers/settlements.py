"""Settlements: who owes whom, the transfers that settle it, and the expense report."""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from splitledger.database import get_db
from splitledger.models import Expense, to_record
from splitledger.schemas import LedgerSummary, PersonBalance, ReportResponse, SimplifiedDebt
from splitledger.services.ledger import ExpenseValidationError, compute_balances
from splitledger.services.report import compute_report
from splitledger.services.settlement_calculator import compute_settlements

router = APIRouter(prefix="/settlements", tags=["settlements"])


def _rounded_balance(b: PersonBalance) -> PersonBalance:
    return PersonBalance(
        person=b.person,
        owes={p: round(v, 2) for p, v in b.owes.items()},
        owed_by={p: round(v, 2) for p, v in b.owed_by.items()},
        net=round(b.net, 2),
    )


def _ledger(db: Session) -> tuple[list, LedgerSummary]:
    records = [to_record(e) for e in db.query(Expense).all()]
    try:
        balances = compute_balances(records)
    except ExpenseValidationError as exc:
        raise HTTPException(status_code=400, detail=f"Expense {exc.expense_id}: {exc}")
    # Settle on cent-rounded nets; every transfer is then at least 0.01.
    rounded = {p: _rounded_balance(b) for p, b in balances.items()}
    settlements = compute_settlements(rounded)
    summary = LedgerSummary(
        balances=list(rounded.values()),
        settlements=[
            SimplifiedDebt(debtor=s.debtor, creditor=s.creditor, amount=round(s.amount, 2))
            for s in settlements
        ],
    )
    return records, summary


@router.get("", response_model=LedgerSummary)
def get_settlements(db: Session = Depends(get_db)):
    _, summary = _ledger(db)
    return summary


@router.get("/report", response_model=ReportResponse)
def get_report(db: Session = Depends(get_db)):
    records, summary = _ledger(db)
    stats = compute_report(records)
    return ReportResponse(
        **stats.model_dump(),
        generated_at=datetime.now(timezone.utc),
        balances=summary.balances,
        settlements=summary.settlements,
    )
