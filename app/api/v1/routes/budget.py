from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.session import get_db
from app.services.budget_services import (
    list_budgets,
    get_budget,
    create_budget,
    update_budget,
    delete_budget,
    update_spent,
)
from app.schemas.budget import BudgetCreate, BudgetOut, BudgetUpdate, SpentUpdate, SpentUpdateOut
from app.schemas.user import AuthUser
from app.core.dependencies import get_current_user

router = APIRouter()

@router.get("/", response_model=list[BudgetOut])
async def all_budgets(db: AsyncSession = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    return await list_budgets(db, user)

@router.post("/", response_model=BudgetOut, status_code=201)
async def new_budget(data: BudgetCreate, db: AsyncSession = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    return await create_budget(db, data, user)

@router.post("/update-spent", response_model=SpentUpdateOut)
async def spent(data: SpentUpdate, db: AsyncSession = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    return await update_spent(db, data, user)

@router.get("/{budget_id}", response_model=BudgetOut)
async def fetch(budget_id: str, db: AsyncSession = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    return await get_budget(db, budget_id, user)

@router.put("/{budget_id}", response_model=BudgetOut)
async def edit(budget_id: str, data: BudgetUpdate, db: AsyncSession = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    return await update_budget(db, budget_id, data, user)

@router.delete("/{budget_id}")
async def remove(budget_id: str, db: AsyncSession = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    return await delete_budget(db, budget_id, user)
