from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field
from typing import Literal

Period = Literal["weekly", "monthly", "yearly"]

class BudgetCreate(BaseModel):
    category: str = Field(min_length=1)
    limit: Decimal = Field(gt=0)
    period: Period = "monthly"

class BudgetUpdate(BaseModel):
    category: str | None = Field(default=None, min_length=1)
    limit: Decimal | None = Field(default=None, gt=0)
    period: Period | None = None

class BudgetOut(BaseModel):
    id: str
    category: str
    limit: float
    period: str
    spent: float
    percentage: int
    exceeded: bool
    start_date: datetime
    created_at: datetime
    updated_at: datetime | None = None

class SpentUpdate(BaseModel):
    category: str = Field(min_length=1)
    amount: Decimal = Field(ge=0)
    operation: Literal["add", "subtract"]

class SpentUpdateOut(BaseModel):
    budget: BudgetOut | None = None
    exceeded: bool | None = None
    percentage: int | None = None
    message: str | None = None
