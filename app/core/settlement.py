"""
Balance aggregation and debt settlement for group expenses.

Both functions are pure. They accept anything shaped like the dataclasses
below, so ORM rows (GroupMember, GroupExpense, ExpenseShare) can be passed
straight in.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List, Sequence
import logging

from app.core.exceptions import InvalidExpenseData
from app.core.utils import BALANCE_TOLERANCE, SETTLEMENT_EPSILON, ZERO, to_decimal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Member:
    id: str
    name: str = ""


@dataclass(frozen=True)
class ShareEntry:
    member_id: str
    amount: Decimal


@dataclass(frozen=True)
class GroupExpense:
    amount: Decimal
    paid_by: str
    shares: Sequence[ShareEntry] = field(default_factory=tuple)


@dataclass(frozen=True)
class Transfer:
    from_member_id: str
    to_member_id: str
    amount: Decimal


def compute_balances(members: Iterable, expenses: Iterable) -> Dict[str, Decimal]:
    """
    net_balance = total_paid - total_owed

    Positive means the member is owed money, negative means they owe.
    Every member is present in the result, in the order given.

    Raises InvalidExpenseData when an expense references an unknown member,
    carries negative amounts, or its shares do not add up to its amount.
    """
    balances: Dict[str, Decimal] = {m.id: ZERO for m in members}

    for idx, exp in enumerate(expenses):
        amount = _amount(exp.amount, f"expense #{idx}")

        if exp.paid_by not in balances:
            raise InvalidExpenseData(
                f"Expense #{idx} is paid by unknown member {exp.paid_by!r}"
            )

        total_shares = ZERO
        owed = []
        for share in exp.shares:
            if share.member_id not in balances:
                raise InvalidExpenseData(
                    f"Expense #{idx} has a share for unknown member {share.member_id!r}"
                )
            share_amt = _amount(share.amount, f"share of {share.member_id!r} in expense #{idx}")
            total_shares += share_amt
            owed.append((share.member_id, share_amt))

        if abs(total_shares - amount) > BALANCE_TOLERANCE:
            raise InvalidExpenseData(
                f"Split total ({total_shares}) must equal expense amount ({amount})"
            )

        # payer fronts the whole amount, then everyone (payer included) owes their share
        balances[exp.paid_by] += amount
        for member_id, share_amt in owed:
            balances[member_id] -= share_amt

    return balances


def compute_settlements(
    balances: Dict[str, Decimal],
    tolerance: Decimal = SETTLEMENT_EPSILON,
) -> List[Transfer]:
    """
    Greedy matching of the largest creditor with the largest debtor.

    Produces at most (creditors + debtors - 1) transfers. This is not the
    minimum number of transfers in general; finding that is NP-hard.
    """
    creditors = []
    debtors = []

    # list.sort is stable, so equal balances keep the input order
    for uid, bal in balances.items():
        bal = to_decimal(bal)
        if bal > tolerance:
            creditors.append([uid, bal])
        elif bal < -tolerance:
            debtors.append([uid, -bal])

    creditors.sort(key=lambda x: x[1], reverse=True)
    debtors.sort(key=lambda x: x[1], reverse=True)

    transfers: List[Transfer] = []
    i = 0
    j = 0

    while i < len(creditors) and j < len(debtors):
        cred_id, cred_amt = creditors[i]
        debt_id, debt_amt = debtors[j]

        pay_amt = min(cred_amt, debt_amt)
        transfers.append(Transfer(from_member_id=debt_id, to_member_id=cred_id, amount=pay_amt))

        creditors[i][1] = cred_amt - pay_amt
        debtors[j][1] = debt_amt - pay_amt

        if creditors[i][1] <= tolerance:
            i += 1
        if debtors[j][1] <= tolerance:
            j += 1

    if i < len(creditors) or j < len(debtors):
        logger.warning(
            "Balances do not net to zero, %d creditor(s) and %d debtor(s) left unsettled",
            len(creditors) - i,
            len(debtors) - j,
        )

    return transfers


def _amount(value, what: str) -> Decimal:
    try:
        amount = to_decimal(value)
    except ValueError:
        raise InvalidExpenseData(f"Amount of {what} is not a number: {value!r}")
    if amount < 0:
        raise InvalidExpenseData(f"Amount of {what} must not be negative")
    return amount
