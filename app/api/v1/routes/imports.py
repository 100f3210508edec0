from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.session import get_db
from app.core.bank_statement import SAMPLE_CSV
from app.services.import_services import preview_bank_statement
from app.schemas.statement import StatementPreviewOut
from app.schemas.user import AuthUser
from app.core.dependencies import get_current_user

router = APIRouter()

@router.post("/bank-statement", response_model=StatementPreviewOut)
async def bank_statement(
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
):
    return await preview_bank_statement(db, file, user)

@router.get("/bank-statement/sample", response_class=PlainTextResponse)
async def bank_statement_sample():
    return SAMPLE_CSV
