from fastapi import HTTPException, Request
from app.core.config import settings
from app.core.security import decode_token, get_bearer_token
from app.schemas.user import AuthUser


def demo_user() -> AuthUser:
    return AuthUser(
        id=settings.DEMO_USER_ID,
        name=settings.DEMO_USER_NAME,
        email=settings.DEMO_USER_EMAIL,
    )


async def get_current_user(request: Request) -> AuthUser:
    token = get_bearer_token(request)

    if token is None:
        if settings.DEMO_MODE:
            return demo_user()
        raise HTTPException(status_code=401, detail="Missing token")

    payload = decode_token(token)
    user_id = payload.get("sub")

    if user_id is None:
        raise HTTPException(status_code=401, detail="Invalid authentication credentials")

    return AuthUser(
        id=str(user_id),
        name=payload.get("name") or str(user_id),
        email=payload.get("email"),
    )


def is_group_member(group, user: AuthUser) -> bool:
    # members invited by email get access once they sign in with that email
    email = (user.email or "").lower()
    if group.owner_id == user.id:
        return True
    return any(
        m.user_id == user.id or (email and (m.email or "").lower() == email)
        for m in group.members
    )


def ensure_group_member(group, user: AuthUser):
    if is_group_member(group, user):
        return
    raise HTTPException(403, "You are not a member of this group")


def ensure_group_owner(group, user: AuthUser, action: str):
    if group.owner_id != user.id:
        raise HTTPException(403, f"Only group owner can {action}")
