from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.session import get_db
from app.services.rule_services import (
    list_rules,
    create_rule,
    update_rule,
    delete_rule,
    apply_rules,
    dry_run_rule,
)
from app.schemas.rule import (
    RuleApplyOut,
    RuleApplyRequest,
    RuleCreate,
    RuleOut,
    RuleTestOut,
    RuleTestRequest,
    RuleUpdate,
)
from app.schemas.user import AuthUser
from app.core.dependencies import get_current_user

router = APIRouter()

@router.get("/", response_model=list[RuleOut])
async def all_rules(db: AsyncSession = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    return await list_rules(db, user)

@router.post("/", response_model=RuleOut, status_code=201)
async def new_rule(data: RuleCreate, db: AsyncSession = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    return await create_rule(db, data, user)

# declared before /{rule_id} so "apply" and "test" are not taken as ids
@router.post("/apply", response_model=RuleApplyOut)
async def apply(data: RuleApplyRequest, db: AsyncSession = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    return await apply_rules(db, data.expense, user)

@router.post("/test", response_model=RuleTestOut)
async def try_condition(data: RuleTestRequest, user: AuthUser = Depends(get_current_user)):
    return dry_run_rule(data.condition, data.test_value)

@router.put("/{rule_id}", response_model=RuleOut)
async def edit(rule_id: str, data: RuleUpdate, db: AsyncSession = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    return await update_rule(db, rule_id, data, user)

@router.delete("/{rule_id}")
async def remove(rule_id: str, db: AsyncSession = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    return await delete_rule(db, rule_id, user)
