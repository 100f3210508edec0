import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime


def new_id(prefix: str):
    def generate():
        return f"{prefix}-{uuid.uuid4().hex[:12]}"
    return generate


def utcnow():
    return datetime.now(timezone.utc)


class IdentityMixin:
    # seq keeps insertion order, id is what the API exposes
    seq = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
