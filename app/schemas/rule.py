from datetime import datetime
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Literal

class RuleCondition(BaseModel):
    field: str = "description"
    # unknown operators are stored as-is and never match
    operator: str = "contains"
    value: Any = ""

class RuleAction(BaseModel):
    type: Literal["set_category", "add_tag"] = "set_category"
    value: str = ""

class RuleCreate(BaseModel):
    name: str = Field(min_length=1)
    condition: RuleCondition
    action: RuleAction
    is_active: bool = True

class RuleUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    condition: RuleCondition | None = None
    action: RuleAction | None = None
    is_active: bool | None = None

class RuleOut(BaseModel):
    id: str
    name: str
    condition: RuleCondition
    action: RuleAction
    is_active: bool
    created_at: datetime
    updated_at: datetime | None = None

    class Config:
        from_attributes = True

class RuleApplyRequest(BaseModel):
    expense: Dict[str, Any]

class Suggestions(BaseModel):
    category: str | None = None
    tags: List[str] = []

class RuleApplyOut(BaseModel):
    matched_rules: List[RuleOut]
    suggestions: Suggestions

class RuleTestRequest(BaseModel):
    condition: RuleCondition
    test_value: str = Field(min_length=1)

class RuleTestOut(BaseModel):
    matches: bool
