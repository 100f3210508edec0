from datetime import datetime
from pydantic import BaseModel, EmailStr, Field
from typing import List
from app.schemas.expense import GroupExpenseOut

class GroupCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str = ""
    emoji: str | None = None

class MemberCreate(BaseModel):
    email: EmailStr
    name: str | None = None

class MemberOut(BaseModel):
    id: str
    name: str
    email: str | None = None
    role: str
    user_id: str | None = None

    class Config:
        from_attributes = True

class GroupSummaryOut(BaseModel):
    id: str
    name: str
    description: str
    emoji: str
    member_count: int
    total_expenses: int
    is_owner: bool

class GroupOut(BaseModel):
    id: str
    name: str
    description: str
    emoji: str
    owner_id: str
    members: List[MemberOut]
    expenses: List[GroupExpenseOut]
    created_at: datetime
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
