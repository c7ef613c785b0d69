"""Pydantic schemas for the ledger engine and request/response."""
from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel


# ----- Ledger engine -----
class ExpenseRecord(BaseModel):
    """One shared expense: `amount` paid by `payer`, split equally across `participants`.

    `participants` keeps order and duplicates; a name listed twice takes two shares.
    `receipt_uri` is an opaque reference the ledger never looks at.
    """

    id: str
    description: str = ""
    amount: float
    payer: str
    participants: list[str]
    created_at: Optional[datetime] = None
    receipt_uri: Optional[str] = None

    class Config:
        frozen = True


class PersonBalance(BaseModel):
    person: str
    owes: dict[str, float] = {}
    owed_by: dict[str, float] = {}
    net: float = 0.0


class SimplifiedDebt(BaseModel):
    debtor: str
    creditor: str
    amount: float


# ----- Expense -----
class ExpenseBase(BaseModel):
    description: str
    amount: float
    payer: str
    receipt_uri: Optional[str] = None


class ExpenseCreate(ExpenseBase):
    # Either a list of names or a single comma-separated string.
    participants: Union[list[str], str]


class ExpenseResponse(ExpenseBase):
    id: str
    participants: list[str]
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ----- Settlement -----
class LedgerSummary(BaseModel):
    balances: list[PersonBalance]
    settlements: list[SimplifiedDebt]


# ----- Report -----
class PersonSpending(BaseModel):
    person: str
    paid: float


class ReportStats(BaseModel):
    total_amount: float = 0.0
    expense_count: int = 0
    average_amount: float = 0.0
    largest_amount: float = 0.0
    smallest_amount: float = 0.0
    person_count: int = 0
    spending_by_person: list[PersonSpending] = []


class ReportResponse(ReportStats):
    generated_at: datetime
    balances: list[PersonBalance]
    settlements: list[SimplifiedDebt]
