import logging
from datetime import date
from decimal import Decimal
from typing import List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException
from app.core.utils import BALANCE_TOLERANCE, ZERO, qround, split_by_percentage, split_equally
from app.models.base import utcnow
from app.models.expense import GroupExpense
from app.models.expense_share import ExpenseShare
from app.models.group import Group
from app.schemas.expense import GroupExpenseCreate
from app.schemas.user import AuthUser

logger = logging.getLogger(__name__)


def serialize_expense(e: GroupExpense) -> dict:
    return {
        "id": e.id,
        "group_id": e.group_id,
        "amount": float(qround(Decimal(e.amount))),
        "category": e.category,
        "description": e.description,
        "date": e.date,
        "paid_by": e.paid_by,
        "split_type": e.split_type,
        "shares": [
            {"member_id": s.member_id, "amount": float(qround(Decimal(s.amount)))}
            for s in e.shares
        ],
        "created_at": e.created_at,
    }


def resolve_payer(group: Group, data: GroupExpenseCreate, user: AuthUser) -> str:
    member_ids = {m.id for m in group.members}

    if data.paid_by:
        if data.paid_by not in member_ids:
            raise HTTPException(400, "Payer is not a member of the group")
        return data.paid_by

    email = (user.email or "").lower()
    for m in group.members:
        if m.user_id == user.id or (email and (m.email or "").lower() == email):
            return m.id

    raise HTTPException(400, "Payer is not a member of the group")


def resolve_shares(group: Group, data: GroupExpenseCreate) -> List[Tuple[str, Decimal]]:
    amount = qround(data.amount)
    member_ids = [m.id for m in group.members]

    if data.shares:
        share_ids = [s.member_id for s in data.shares]
    else:
        share_ids = member_ids

    if len(share_ids) != len(set(share_ids)):
        raise HTTPException(400, "Duplicate members found in shares")

    unknown = set(share_ids) - set(member_ids)
    if unknown:
        raise HTTPException(400, "One or more members in shares are not members of the group")

    if data.split_type == "equal":
        return list(zip(share_ids, split_equally(amount, len(share_ids))))

    if not data.shares:
        raise HTTPException(400, f"Shares are required for a {data.split_type} split")

    if data.split_type == "percentage":
        if any(s.percentage is None for s in data.shares):
            raise HTTPException(400, "Every share needs a percentage")
        try:
            amounts = split_by_percentage(amount, [s.percentage for s in data.shares])
        except ValueError as e:
            raise HTTPException(400, str(e))
        return list(zip(share_ids, amounts))

    # exact
    if any(s.amount is None for s in data.shares):
        raise HTTPException(400, "Every share needs an amount")

    amounts = [qround(s.amount) for s in data.shares]
    total_split = sum(amounts, ZERO)

    if abs(total_split - amount) > BALANCE_TOLERANCE:
        raise HTTPException(
            400,
            f"Split total ({total_split}) must equal expense amount ({amount})"
        )

    return list(zip(share_ids, amounts))


async def create_group_expense(db: AsyncSession, group: Group, data: GroupExpenseCreate, user: AuthUser):
    if data.amount <= 0:
        raise HTTPException(400, "Expense amount must be positive")

    payer = resolve_payer(group, data, user)
    shares = resolve_shares(group, data)

    category = data.category.strip()
    if not category:
        raise HTTPException(400, "Amount and category are required")

    expense = GroupExpense(
        paid_by=payer,
        amount=qround(data.amount),
        category=category,
        description=data.description or "",
        date=data.date or date.today(),
        split_type=data.split_type,
        shares=[ExpenseShare(member_id=mid, amount=amt) for mid, amt in shares],
    )

    group.expenses.append(expense)
    group.updated_at = utcnow()

    await db.flush()
    await db.commit()

    logger.info(
        "Expense %s (%s) added to group %s, paid by %s",
        expense.id, expense.amount, group.id, payer,
    )
    return serialize_expense(expense)


def list_group_expenses(group: Group):
    return [serialize_expense(e) for e in group.expenses]
