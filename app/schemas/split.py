from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field
from typing import List, Literal

class ParticipantIn(BaseModel):
    id: str | None = None
    name: str = Field(min_length=1)
    share_amount: Decimal = Field(ge=0)
    paid_amount: Decimal = Field(default=Decimal("0"), ge=0)
    role: Literal["payer", "participant"] = "participant"
    status: Literal["pending", "partial", "paid"] = "pending"

class SplitCreate(BaseModel):
    title: str = Field(min_length=1)
    total_amount: Decimal = Field(gt=0)
    participants: List[ParticipantIn] = Field(min_length=1)

class ParticipantOut(BaseModel):
    id: str
    name: str
    share_amount: float
    paid_amount: float
    role: str
    status: str
    paid_at: datetime | None = None

class SplitOut(BaseModel):
    id: str
    title: str
    total_amount: float
    read: bool
    created_at: datetime
    remaining: float
    participants: List[ParticipantOut]

class PayRequest(BaseModel):
    participant_id: str
    amount: Decimal | None = Field(default=None, gt=0)

class PayOut(BaseModel):
    split: SplitOut
    remaining: float

class ReadRequest(BaseModel):
    read: bool
