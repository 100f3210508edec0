import logging
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException
from app.core.dependencies import ensure_group_member, ensure_group_owner
from app.db.repository import Repository
from app.models.group import Group
from app.models.group_member import GroupMember
from app.models.base import utcnow
from app.schemas.group import GroupCreate, MemberCreate
from app.schemas.user import AuthUser
from app.services.expense_services import serialize_expense

logger = logging.getLogger(__name__)


def group_repo(db: AsyncSession) -> Repository[Group]:
    return Repository(db, Group)


def serialize_member(m: GroupMember) -> dict:
    return {
        "id": m.id,
        "name": m.name,
        "email": m.email,
        "role": m.role,
        "user_id": m.user_id,
    }


def serialize_group(group: Group) -> dict:
    return {
        "id": group.id,
        "name": group.name,
        "description": group.description,
        "emoji": group.emoji,
        "owner_id": group.owner_id,
        "members": [serialize_member(m) for m in group.members],
        "expenses": [serialize_expense(e) for e in group.expenses],
        "created_at": group.created_at,
        "updated_at": group.updated_at,
    }


async def get_group_for_user(db: AsyncSession, group_id: str, user: AuthUser) -> Group:
    group = await group_repo(db).get(group_id)

    if not group:
        raise HTTPException(404, "Group not found")

    ensure_group_member(group, user)
    return group


async def create_group(db: AsyncSession, data: GroupCreate, user: AuthUser):
    name = data.name.strip()
    if not name:
        raise HTTPException(400, "Group name is required")

    owner = GroupMember(
        user_id=user.id,
        name=user.name,
        email=user.email,
        role="owner",
    )

    group = Group(
        name=name,
        description=data.description or "",
        emoji=data.emoji or "👥",
        owner_id=user.id,
        members=[owner],
        expenses=[],
    )

    await group_repo(db).insert(group)
    await db.commit()

    logger.info("Group %s created by %s", group.id, user.id)
    return serialize_group(group)


def membership_clause(user: AuthUser):
    """Groups the user owns, or has a member row in by user id or invited email."""
    member_match = GroupMember.user_id == user.id
    if user.email:
        member_match = or_(member_match, func.lower(GroupMember.email) == user.email.lower())

    member_of = select(GroupMember.group_id).where(member_match)
    return or_(Group.owner_id == user.id, Group.id.in_(member_of))


async def list_groups_for_user(db: AsyncSession, user: AuthUser):
    visible = await group_repo(db).list(membership_clause(user))

    return [
        {
            "id": g.id,
            "name": g.name,
            "description": g.description,
            "emoji": g.emoji,
            "member_count": len(g.members),
            "total_expenses": len(g.expenses),
            "is_owner": g.owner_id == user.id,
        }
        for g in visible
    ]


async def get_group(db: AsyncSession, group_id: str, user: AuthUser):
    group = await get_group_for_user(db, group_id, user)
    return serialize_group(group)


async def add_member(db: AsyncSession, group_id: str, data: MemberCreate, user: AuthUser):
    group = await group_repo(db).get(group_id)

    if not group:
        raise HTTPException(404, "Group not found")

    ensure_group_owner(group, user, "add members")

    email = str(data.email).lower()
    if any((m.email or "").lower() == email for m in group.members):
        raise HTTPException(400, "User is already a member")

    member = GroupMember(
        name=(data.name or "").strip() or email,
        email=email,
        role="member",
    )
    group.members.append(member)
    group.updated_at = utcnow()

    await db.flush()
    await db.commit()

    logger.info("Member %s added to group %s", member.id, group.id)
    return serialize_member(member)


async def delete_group(db: AsyncSession, group_id: str, user: AuthUser):
    repo = group_repo(db)
    group = await repo.get(group_id)

    if not group:
        raise HTTPException(404, "Group not found")

    ensure_group_owner(group, user, "delete the group")

    await repo.delete(group)
    await db.commit()

    logger.info("Group %s deleted by %s", group_id, user.id)
    return {"status": "deleted"}
