from datetime import date as Date, datetime
from decimal import Decimal
from pydantic import BaseModel, Field
from typing import List, Literal

class ShareInput(BaseModel):
    member_id: str
    amount: Decimal | None = Field(default=None, ge=0)
    percentage: Decimal | None = Field(default=None, ge=0, le=100)

class GroupExpenseCreate(BaseModel):
    amount: Decimal
    category: str = Field(min_length=1)
    description: str = ""
    date: Date | None = None
    paid_by: str | None = None
    split_type: Literal["equal", "exact", "percentage"] = "equal"
    shares: List[ShareInput] = []

class ShareOut(BaseModel):
    member_id: str
    amount: float

    class Config:
        from_attributes = True

class GroupExpenseOut(BaseModel):
    id: str
    group_id: str
    amount: float
    category: str
    description: str
    date: Date
    paid_by: str
    split_type: str
    shares: List[ShareOut]
    created_at: datetime

    class Config:
        from_attributes = True
