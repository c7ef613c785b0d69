"""Reduce net balances to a short list of transfers so everyone is settled (who pays whom).

Greedy: the largest remaining debtor pays the largest remaining creditor. This keeps the
transfer count at most debtors + creditors - 1 but is not guaranteed to be the minimum,
which would mean solving an NP-hard partition problem.
"""
import logging

from splitledger.schemas import PersonBalance, SimplifiedDebt

logger = logging.getLogger(__name__)

# Remainders at or below this are treated as settled.
EPSILON = 1e-9


def _ranked(entries: list[tuple[str, float]]) -> list[list]:
    # Largest amount first; equal amounts by name so output is reproducible.
    return [[person, owed] for person, owed in sorted(entries, key=lambda x: (-x[1], x[0]))]


def compute_settlements(balances: dict[str, PersonBalance]) -> list[SimplifiedDebt]:
    """
    balances: person -> PersonBalance (net > 0 = is owed money, net < 0 = owes money).
    Returns transfers in payment order, debtor by debtor.
    """
    debtors = _ranked([(p, -b.net) for p, b in balances.items() if b.net < -EPSILON])
    creditors = _ranked([(p, b.net) for p, b in balances.items() if b.net > EPSILON])

    out: list[SimplifiedDebt] = []
    i, j = 0, 0
    while i < len(debtors) and j < len(creditors):
        debtor, creditor = debtors[i], creditors[j]
        transfer = min(debtor[1], creditor[1])
        out.append(SimplifiedDebt(debtor=debtor[0], creditor=creditor[0], amount=transfer))
        debtor[1] -= transfer
        creditor[1] -= transfer
        if debtor[1] <= EPSILON:
            i += 1
        if creditor[1] <= EPSILON:
            j += 1
    logger.debug(
        "Settled %d debtors and %d creditors in %d transfers",
        len(debtors), len(creditors), len(out),
    )
    return out
