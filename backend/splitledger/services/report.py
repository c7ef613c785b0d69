"""Summary statistics over the expense log."""
from typing import Iterable

from splitledger.schemas import ExpenseRecord, PersonSpending, ReportStats


def compute_report(records: Iterable[ExpenseRecord]) -> ReportStats:
    records = list(records)
    if not records:
        return ReportStats()

    amounts = [r.amount for r in records]
    total = sum(amounts)
    people: set[str] = set()
    paid: dict[str, float] = {}
    for r in records:
        people.add(r.payer)
        people.update(r.participants)
        paid[r.payer] = paid.get(r.payer, 0.0) + r.amount

    spending = [
        PersonSpending(person=p, paid=amt)
        for p, amt in sorted(paid.items(), key=lambda x: (-x[1], x[0]))
    ]
    return ReportStats(
        total_amount=total,
        expense_count=len(records),
        average_amount=total / len(records),
        largest_amount=max(amounts),
        smallest_amount=min(amounts),
        person_count=len(people),
        spending_by_person=spending,
    )
