from fastapi import APIRouter, Depends
from app.core.dependencies import demo_user, get_current_user
from app.core.security import create_access_token
from app.schemas.user import AuthUser, TokenOut

router = APIRouter()

@router.post("/demo-login", response_model=TokenOut)
async def demo_login():
    user = demo_user()
    token = create_access_token({"sub": user.id, "name": user.name, "email": user.email})
    return {"access_token": token, "token_type": "bearer", "user": user}

@router.get("/me", response_model=AuthUser)
async def me(user: AuthUser = Depends(get_current_user)):
    return user
