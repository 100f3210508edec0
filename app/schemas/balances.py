from pydantic import BaseModel

class MemberBalance(BaseModel):
    member_id: str
    name: str
    balance: float
    formatted: str

class Settlement(BaseModel):
    from_id: str
    from_name: str | None
    to_id: str
    to_name: str | None
    amount: float
    formatted: str

class GroupSettlementsOut(BaseModel):
    settlements: list[Settlement]
    balances: list[MemberBalance]
    is_settled: bool
