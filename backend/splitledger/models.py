"""SQLAlchemy models."""
import uuid

from sqlalchemy import Column, Integer, String, Float, DateTime, JSON
from sqlalchemy.sql import func

from splitledger.database import Base
from splitledger.schemas import ExpenseRecord


def _new_id() -> str:
    return uuid.uuid4().hex


class Expense(Base):
    __tablename__ = "expenses"

    # Insertion order for listing.
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(32), unique=True, index=True, nullable=False, default=_new_id)
    description = Column(String(512), nullable=False)
    amount = Column(Float, nullable=False)
    payer = Column(String(255), nullable=False, index=True)
    # Ordered list of names; duplicates count as repeated shares.
    participants = Column(JSON, nullable=False, default=list)
    receipt_uri = Column(String(1024), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


def to_record(expense: Expense) -> ExpenseRecord:
    return ExpenseRecord(
        id=expense.id,
        description=expense.description,
        amount=expense.amount,
        payer=expense.payer,
        participants=list(expense.participants or []),
        created_at=expense.created_at,
        receipt_uri=expense.receipt_uri,
    )
