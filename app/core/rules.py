"""
Rule matching for category and tag suggestions.

A rule is a condition {field, operator, value} plus an action
{type, value}. Evaluation is advisory: malformed conditions simply
don't match, nothing in here raises.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional
import re

from app.core.utils import to_decimal


class RuleField(str, Enum):
    DESCRIPTION = "description"
    CATEGORY = "category"
    AMOUNT = "amount"
    PAYMENT_METHOD = "payment_method"
    NOTES = "notes"
    MERCHANT = "merchant"


class Operator(str, Enum):
    CONTAINS = "contains"
    EQUALS = "equals"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    REGEX = "regex"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"


class ActionType(str, Enum):
    SET_CATEGORY = "set_category"
    ADD_TAG = "add_tag"


def _lookup(*keys: str) -> Callable[[Mapping], Any]:
    def accessor(record: Mapping):
        for key in keys:
            value = record.get(key)
            if value is not None:
                return value
        return None
    return accessor


# camelCase aliases come from the frontend payloads
FIELD_ACCESSORS: Dict[RuleField, Callable[[Mapping], Any]] = {
    RuleField.DESCRIPTION: _lookup("description"),
    RuleField.CATEGORY: _lookup("category"),
    RuleField.AMOUNT: _lookup("amount"),
    RuleField.PAYMENT_METHOD: _lookup("payment_method", "paymentMethod"),
    RuleField.NOTES: _lookup("notes"),
    RuleField.MERCHANT: _lookup("merchant"),
}


@dataclass(frozen=True)
class Condition:
    field: str = RuleField.DESCRIPTION.value
    operator: str = Operator.CONTAINS.value
    value: Any = ""


@dataclass
class RuleEvaluation:
    matched_rules: List[Any] = field(default_factory=list)
    category: Optional[str] = None
    tags: List[str] = field(default_factory=list)


def field_value(record: Mapping, name: str) -> Any:
    try:
        accessor = FIELD_ACCESSORS[RuleField(name)]
    except ValueError:
        accessor = _lookup(name)

    value = accessor(record)
    return "" if value is None else value


def _as_text(value: Any) -> str:
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


def _as_number(value: Any) -> Optional[Decimal]:
    try:
        return to_decimal(value)
    except ValueError:
        return None


def matches(condition, record: Mapping) -> bool:
    """
    Evaluates one condition against one expense-like mapping.
    `condition` may be a Condition, a pydantic model or a plain dict.
    """
    try:
        if isinstance(condition, Mapping):
            field_name = condition.get("field") or RuleField.DESCRIPTION.value
            operator = condition.get("operator")
            value = condition.get("value")
        else:
            field_name = getattr(condition, "field", None) or RuleField.DESCRIPTION.value
            operator = getattr(condition, "operator", None)
            value = getattr(condition, "value", None)

        record_value = field_value(record or {}, str(field_name))
        target = "" if value is None else value

        if operator in (Operator.GREATER_THAN, Operator.LESS_THAN):
            left = _as_number(record_value)
            right = _as_number(target)
            if left is None or right is None:
                return False
            if operator == Operator.GREATER_THAN:
                return left > right
            return left < right

        text = _as_text(record_value).lower()
        needle = _as_text(target).lower()

        if operator == Operator.CONTAINS:
            return needle in text
        if operator == Operator.EQUALS:
            return text == needle
        if operator == Operator.STARTS_WITH:
            return text.startswith(needle)
        if operator == Operator.ENDS_WITH:
            return text.endswith(needle)
        if operator == Operator.REGEX:
            try:
                return re.search(_as_text(target), _as_text(record_value), re.IGNORECASE) is not None
            except re.error:
                return False

        return False
    except (TypeError, AttributeError, ValueError, RecursionError):
        return False


def evaluate_rules(rules: Iterable, record: Mapping) -> RuleEvaluation:
    """
    Runs every active rule in order. The last matching set_category wins,
    add_tag values accumulate without duplicates.
    """
    result = RuleEvaluation()

    for rule in rules:
        if not getattr(rule, "is_active", True):
            continue
        if not matches(rule.condition, record):
            continue

        result.matched_rules.append(rule)

        action = rule.action
        action_type = action.get("type") if isinstance(action, Mapping) else getattr(action, "type", None)
        action_value = action.get("value") if isinstance(action, Mapping) else getattr(action, "value", None)

        if action_type == ActionType.SET_CATEGORY:
            result.category = action_value
        elif action_type == ActionType.ADD_TAG and action_value and action_value not in result.tags:
            result.tags.append(action_value)

    return result
