from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.session import get_db
from app.services.group_services import (
    create_group,
    list_groups_for_user,
    get_group,
    get_group_for_user,
    add_member,
    delete_group,
)
from app.services.expense_services import create_group_expense, list_group_expenses
from app.services.settlement_service import get_group_balances, compute_group_settlements
from app.schemas.group import GroupCreate, GroupOut, GroupSummaryOut, MemberCreate, MemberOut
from app.schemas.expense import GroupExpenseCreate, GroupExpenseOut
from app.schemas.balances import GroupSettlementsOut, MemberBalance
from app.schemas.user import AuthUser
from app.core.dependencies import get_current_user

router = APIRouter()

@router.get("/", response_model=list[GroupSummaryOut])
async def my_groups(db: AsyncSession = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    return await list_groups_for_user(db, user)

@router.post("/", response_model=GroupOut, status_code=201)
async def create_new_group(
    data: GroupCreate,
    db: AsyncSession = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    return await create_group(db, data, user)

@router.get("/{group_id}", response_model=GroupOut)
async def group_details(group_id: str, db: AsyncSession = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    return await get_group(db, group_id, user)

@router.delete("/{group_id}")
async def remove_group(group_id: str, db: AsyncSession = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    return await delete_group(db, group_id, user)

@router.post("/{group_id}/members", response_model=MemberOut, status_code=201)
async def add_user_to_group(
    group_id: str,
    data: MemberCreate,
    db: AsyncSession = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
):
    return await add_member(db, group_id, data, user)

@router.post("/{group_id}/expenses", response_model=GroupExpenseOut, status_code=201)
async def add_expense(
    group_id: str,
    data: GroupExpenseCreate,
    db: AsyncSession = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
):
    group = await get_group_for_user(db, group_id, user)
    return await create_group_expense(db, group, data, user)

@router.get("/{group_id}/expenses", response_model=list[GroupExpenseOut])
async def all_expenses(group_id: str, db: AsyncSession = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    group = await get_group_for_user(db, group_id, user)
    return list_group_expenses(group)

@router.get("/{group_id}/balances", response_model=list[MemberBalance])
async def balances(group_id: str, db: AsyncSession = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    group = await get_group_for_user(db, group_id, user)
    return get_group_balances(group)

@router.get("/{group_id}/settlements", response_model=GroupSettlementsOut)
async def settlements(group_id: str, db: AsyncSession = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    group = await get_group_for_user(db, group_id, user)
    return compute_group_settlements(group)
