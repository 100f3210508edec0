import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.core.config import settings
from app.core.db_check import wait_for_db
from app.core.exceptions import ExpenseTrackerError
from app.core.logging import configure_logging
from app.db.session import create_tables, engine
from app.api.v1.routes.auth import router as auth_router
from app.api.v1.routes.budget import router as budget_router
from app.api.v1.routes.group import router as group_router
from app.api.v1.routes.imports import router as imports_router
from app.api.v1.routes.rule import router as rule_router
from app.api.v1.routes.split import router as split_router
from app.api.v1.routes.system import router as system_router

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await wait_for_db()
    await create_tables()
    logger.info("Expenzo backend started (demo mode: %s)", settings.DEMO_MODE)
    yield
    await engine.dispose()


app = FastAPI(title="Expenzo Backend", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ExpenseTrackerError)
async def expense_tracker_error(request: Request, exc: ExpenseTrackerError):
    logger.warning("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/")
async def root():
    return {
        "message": "Expenzo Backend is live",
        "version": "1.0.0",
        "endpoints": {
            "groups": "/api/v1/groups",
            "rules": "/api/v1/rules",
            "splits": "/api/v1/splits",
            "budgets": "/api/v1/budgets",
            "imports": "/api/v1/imports",
        },
    }

app.include_router(system_router, prefix="/api/v1/system")
app.include_router(auth_router, prefix="/api/v1/auth")
app.include_router(group_router, prefix="/api/v1/groups")
app.include_router(rule_router, prefix="/api/v1/rules")
app.include_router(split_router, prefix="/api/v1/splits")
app.include_router(budget_router, prefix="/api/v1/budgets")
app.include_router(imports_router, prefix="/api/v1/imports")
