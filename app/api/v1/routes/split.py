from typing import Literal
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.session import get_db
from app.services.split_services import list_splits, create_split, get_split, mark_paid, mark_read
from app.schemas.split import PayOut, PayRequest, ReadRequest, SplitCreate, SplitOut
from app.schemas.user import AuthUser
from app.core.dependencies import get_current_user

router = APIRouter()

@router.get("/", response_model=list[SplitOut])
async def all_splits(
    status: Literal["open", "settled", "all"] = Query("open"),
    search: str = "",
    db: AsyncSession = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
):
    return await list_splits(db, user, status=status, search=search)

@router.post("/", response_model=SplitOut, status_code=201)
async def new_split(data: SplitCreate, db: AsyncSession = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    return await create_split(db, data, user)

@router.get("/{split_id}", response_model=SplitOut)
async def fetch(split_id: str, db: AsyncSession = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    return await get_split(db, split_id, user)

@router.put("/{split_id}/pay", response_model=PayOut)
async def pay(split_id: str, data: PayRequest, db: AsyncSession = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    return await mark_paid(db, split_id, data, user)

@router.put("/{split_id}/read", response_model=SplitOut)
async def read(split_id: str, data: ReadRequest, db: AsyncSession = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    return await mark_read(db, split_id, data.read, user)
