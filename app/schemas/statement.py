from pydantic import BaseModel
from typing import List

class BankTransactionOut(BaseModel):
    id: str
    date: str
    description: str
    amount: float
    category: str
    type: str
    selected: bool
    original_row: List[str]
    matched_rules: List[str] = []

class StatementSummary(BaseModel):
    total: int
    total_amount: float
    total_income: float
    categories: List[str]

class StatementPreviewOut(BaseModel):
    filename: str | None = None
    transactions: List[BankTransactionOut]
    summary: StatementSummary
