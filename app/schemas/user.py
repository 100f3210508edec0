from pydantic import BaseModel

class AuthUser(BaseModel):
    id: str
    name: str
    email: str | None = None

class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: AuthUser
