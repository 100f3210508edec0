from sqlalchemy import Boolean, Column, DateTime, JSON, String
from app.db.session import Base
from app.models.base import IdentityMixin, new_id, utcnow

class Rule(IdentityMixin, Base):
    __tablename__ = "rules"

    id = Column(String, unique=True, index=True, nullable=False, default=new_id("rule"))
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    # {"field": ..., "operator": ..., "value": ...}
    condition = Column(JSON, nullable=False)
    # {"type": "set_category" | "add_tag", "value": ...}
    action = Column(JSON, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
