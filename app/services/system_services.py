import logging
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.repository import Repository
from app.db.session import engine
from app.models import Budget, Group, GroupExpense, Rule, Split

logger = logging.getLogger(__name__)

# metric name -> model whose rows it counts
COUNTED_MODELS = {
    "groups": Group,
    "group_expenses": GroupExpense,
    "rules": Rule,
    "splits": Split,
    "budgets": Budget,
}


async def check_db_service():
    try:
        async with engine.connect() as conn:
            await conn.exec_driver_sql("SELECT 1")
        return {"db": True, "message": "Database is connected"}
    except Exception as e:
        logger.error("Database health check failed: %s", e)
        return {"db": False, "error": str(e)}


async def system_health():
    return {
        "status": "ok"
    }


async def system_metrics(db: AsyncSession):
    return {
        name: await Repository(db, model).count()
        for name, model in COUNTED_MODELS.items()
    }
