"""Fold expense records into per-person balances (who owes whom, and the net)."""
import logging
import math
from collections import defaultdict
from typing import Iterable, Optional

from splitledger.schemas import ExpenseRecord, PersonBalance

logger = logging.getLogger(__name__)


class ExpenseValidationError(ValueError):
    """A record cannot be folded into the ledger."""

    def __init__(self, message: str, expense_id: Optional[str] = None):
        super().__init__(message)
        self.expense_id = expense_id


def _share_of(record: ExpenseRecord) -> float:
    if not record.participants:
        raise ExpenseValidationError("expense must have at least one participant", record.id)
    if not math.isfinite(record.amount):
        raise ExpenseValidationError("expense amount must be finite", record.id)
    if record.amount <= 0:
        raise ExpenseValidationError("expense amount must be positive", record.id)
    return record.amount / len(record.participants)


def compute_balances(records: Iterable[ExpenseRecord]) -> dict[str, PersonBalance]:
    """
    records: every expense to account for.
    Returns person -> PersonBalance for everyone who paid or participated, keyed in name order.
    Raises ExpenseValidationError before anything is folded if any record is malformed.
    """
    records = list(records)
    shares = [_share_of(r) for r in records]

    owes: dict[str, dict[str, float]] = {}
    owed_by: dict[str, dict[str, float]] = {}
    for record, share in zip(records, shares):
        for person in [record.payer, *record.participants]:
            owes.setdefault(person, defaultdict(float))
            owed_by.setdefault(person, defaultdict(float))
        for p in record.participants:
            if p == record.payer:
                continue
            owes[p][record.payer] += share
            owed_by[record.payer][p] += share

    out: dict[str, PersonBalance] = {}
    for person in sorted(owes):
        out[person] = PersonBalance(
            person=person,
            owes=dict(owes[person]),
            owed_by=dict(owed_by[person]),
            net=sum(owed_by[person].values()) - sum(owes[person].values()),
        )
    logger.debug("Aggregated %d expenses into %d balances", len(records), len(out))
    return out
