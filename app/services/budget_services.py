import logging
from decimal import Decimal, ROUND_HALF_UP
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException
from app.core.utils import ZERO, qround
from app.db.repository import Repository
from app.models.base import utcnow
from app.models.budget import Budget
from app.schemas.budget import BudgetCreate, BudgetUpdate, SpentUpdate
from app.schemas.user import AuthUser

logger = logging.getLogger(__name__)


def budget_repo(db: AsyncSession) -> Repository[Budget]:
    return Repository(db, Budget)


def usage(budget: Budget):
    spent = Decimal(budget.spent or 0)
    limit = Decimal(budget.limit)
    percentage = int((spent / limit * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)) if limit else 0
    return percentage, spent > limit


def serialize_budget(budget: Budget) -> dict:
    percentage, exceeded = usage(budget)
    return {
        "id": budget.id,
        "category": budget.category,
        "limit": float(qround(Decimal(budget.limit))),
        "period": budget.period,
        "spent": float(qround(Decimal(budget.spent or 0))),
        "percentage": percentage,
        "exceeded": exceeded,
        "start_date": budget.start_date,
        "created_at": budget.created_at,
        "updated_at": budget.updated_at,
    }


async def _get_own_budget(db: AsyncSession, budget_id: str, user: AuthUser) -> Budget:
    budget = await budget_repo(db).get(budget_id)
    if not budget or budget.user_id != user.id:
        raise HTTPException(404, "Budget not found")
    return budget


async def _find_budget(db: AsyncSession, user: AuthUser, category: str, period: str):
    found = await budget_repo(db).list(user_id=user.id, category=category, period=period)
    return found[0] if found else None


async def list_budgets(db: AsyncSession, user: AuthUser):
    budgets = await budget_repo(db).list(user_id=user.id)
    return [serialize_budget(b) for b in budgets]


async def get_budget(db: AsyncSession, budget_id: str, user: AuthUser):
    return serialize_budget(await _get_own_budget(db, budget_id, user))


async def create_budget(db: AsyncSession, data: BudgetCreate, user: AuthUser):
    category = data.category.strip()

    if await _find_budget(db, user, category, data.period):
        raise HTTPException(400, "Budget already exists for this category and period")

    budget = Budget(
        user_id=user.id,
        category=category,
        limit=qround(data.limit),
        period=data.period,
        spent=ZERO,
    )

    await budget_repo(db).insert(budget)
    await db.commit()

    logger.info("Budget %s created for %s/%s", budget.id, category, data.period)
    return serialize_budget(budget)


async def update_budget(db: AsyncSession, budget_id: str, data: BudgetUpdate, user: AuthUser):
    budget = await _get_own_budget(db, budget_id, user)

    changes = {}
    if data.category:
        changes["category"] = data.category.strip()
    if data.limit is not None:
        changes["limit"] = qround(data.limit)
    if data.period:
        changes["period"] = data.period

    category = changes.get("category", budget.category)
    period = changes.get("period", budget.period)
    clash = await _find_budget(db, user, category, period)
    if clash and clash.id != budget.id:
        raise HTTPException(400, "Budget already exists for this category and period")

    changes["updated_at"] = utcnow()
    await budget_repo(db).update(budget, **changes)
    await db.commit()

    return serialize_budget(budget)


async def delete_budget(db: AsyncSession, budget_id: str, user: AuthUser):
    budget = await _get_own_budget(db, budget_id, user)

    await budget_repo(db).delete(budget)
    await db.commit()

    logger.info("Budget %s deleted", budget_id)
    return {"status": "deleted"}


async def update_spent(db: AsyncSession, data: SpentUpdate, user: AuthUser):
    budget = await _find_budget(db, user, data.category.strip(), "monthly")

    if not budget:
        return {"message": "No budget set for this category"}

    spent = Decimal(budget.spent or 0)
    amount = qround(data.amount)

    if data.operation == "add":
        spent += amount
    else:
        spent = max(ZERO, spent - amount)

    await budget_repo(db).update(budget, spent=qround(spent), updated_at=utcnow())
    await db.commit()

    percentage, exceeded = usage(budget)
    if exceeded:
        logger.info("Budget %s exceeded (%d%%)", budget.id, percentage)

    return {
        "budget": serialize_budget(budget),
        "exceeded": exceeded,
        "percentage": percentage,
    }
