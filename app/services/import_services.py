import logging
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, UploadFile
from app.core.bank_statement import decode_statement, parse_bank_statement, summarize
from app.core.exceptions import CSVParseError
from app.core.rules import evaluate_rules
from app.schemas.user import AuthUser
from app.services.rule_services import active_rules

logger = logging.getLogger(__name__)

ALLOWED_TYPES = {"text/csv", "application/vnd.ms-excel", "text/plain", "application/octet-stream", ""}


def is_valid_csv(file: UploadFile) -> bool:
    content_type = (file.content_type or "").split(";")[0].strip()
    has_valid_extension = (file.filename or "").lower().endswith(".csv")
    return content_type in ALLOWED_TYPES or has_valid_extension


async def preview_bank_statement(db: AsyncSession, file: UploadFile, user: AuthUser):
    if not is_valid_csv(file):
        raise HTTPException(400, "Please upload a CSV file")

    raw = await file.read()
    if not raw.strip():
        raise HTTPException(400, "Uploaded file is empty")

    try:
        parsed = parse_bank_statement(decode_statement(raw))
    except CSVParseError as e:
        logger.warning("Rejected bank statement %s: %s", file.filename, e.message)
        raise HTTPException(400, e.message)

    # user rules take precedence over the keyword guess
    rules = await active_rules(db, user)
    for tx in parsed["transactions"]:
        result = evaluate_rules(rules, tx)
        tx["matched_rules"] = [r.id for r in result.matched_rules]
        if result.category:
            tx["category"] = result.category

    summary = summarize(parsed["transactions"])
    summary["total_amount"] = float(summary["total_amount"])
    summary["total_income"] = float(summary["total_income"])

    return {
        "filename": file.filename,
        "transactions": [{**tx, "amount": float(tx["amount"])} for tx in parsed["transactions"]],
        "summary": summary,
    }
