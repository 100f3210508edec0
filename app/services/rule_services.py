import logging
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException
from app.core.rules import evaluate_rules, matches
from app.db.repository import Repository
from app.models.base import utcnow
from app.models.rule import Rule
from app.schemas.rule import RuleCreate, RuleUpdate, RuleCondition
from app.schemas.user import AuthUser

logger = logging.getLogger(__name__)


def rule_repo(db: AsyncSession) -> Repository[Rule]:
    return Repository(db, Rule)


def serialize_rule(rule: Rule) -> dict:
    return {
        "id": rule.id,
        "name": rule.name,
        "condition": rule.condition,
        "action": rule.action,
        "is_active": rule.is_active,
        "created_at": rule.created_at,
        "updated_at": rule.updated_at,
    }


async def _get_own_rule(db: AsyncSession, rule_id: str, user: AuthUser) -> Rule:
    rule = await rule_repo(db).get(rule_id)
    if not rule or rule.user_id != user.id:
        raise HTTPException(404, "Rule not found")
    return rule


async def list_rules(db: AsyncSession, user: AuthUser):
    rules = await rule_repo(db).list(user_id=user.id)
    return [serialize_rule(r) for r in rules]


async def active_rules(db: AsyncSession, user: AuthUser):
    return await rule_repo(db).list(user_id=user.id, is_active=True)


async def create_rule(db: AsyncSession, data: RuleCreate, user: AuthUser):
    rule = Rule(
        user_id=user.id,
        name=data.name.strip(),
        condition=data.condition.model_dump(),
        action=data.action.model_dump(),
        is_active=data.is_active,
    )

    await rule_repo(db).insert(rule)
    await db.commit()

    logger.info("Rule %s created for %s", rule.id, user.id)
    return serialize_rule(rule)


async def update_rule(db: AsyncSession, rule_id: str, data: RuleUpdate, user: AuthUser):
    rule = await _get_own_rule(db, rule_id, user)

    changes = {}
    if data.name:
        changes["name"] = data.name.strip()
    if data.condition is not None:
        changes["condition"] = data.condition.model_dump()
    if data.action is not None:
        changes["action"] = data.action.model_dump()
    if data.is_active is not None:
        changes["is_active"] = data.is_active
    changes["updated_at"] = utcnow()

    await rule_repo(db).update(rule, **changes)
    await db.commit()

    return serialize_rule(rule)


async def delete_rule(db: AsyncSession, rule_id: str, user: AuthUser):
    rule = await _get_own_rule(db, rule_id, user)

    await rule_repo(db).delete(rule)
    await db.commit()

    logger.info("Rule %s deleted", rule_id)
    return {"status": "deleted"}


async def apply_rules(db: AsyncSession, expense: dict, user: AuthUser):
    rules = await active_rules(db, user)
    result = evaluate_rules(rules, expense)

    return {
        "matched_rules": [serialize_rule(r) for r in result.matched_rules],
        "suggestions": {
            "category": result.category,
            "tags": result.tags,
        },
    }


def dry_run_rule(condition: RuleCondition, test_value: str):
    mock_expense = {
        "description": test_value,
        "amount": test_value,
        "category": test_value,
    }
    return {"matches": matches(condition, mock_expense)}
