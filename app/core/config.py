from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite://"
    DB_CONNECT_RETRIES: int = 5

    JWT_SECRET: str = "change-me"
    JWT_ALGO: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    DEMO_MODE: bool = True
    DEMO_USER_ID: str = "demo-user"
    DEMO_USER_NAME: str = "Demo User"
    DEMO_USER_EMAIL: str = "demo@expenzo.com"

    CURRENCY_SYMBOL: str = "₹"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["http://localhost:5173"]

    class Config:
        env_file = ".env"

settings = Settings()
