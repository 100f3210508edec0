from sqlalchemy import Column, DateTime, Numeric, String, UniqueConstraint
from app.db.session import Base
from app.models.base import IdentityMixin, new_id, utcnow

class Budget(IdentityMixin, Base):
    __tablename__ = "budgets"
    __table_args__ = (
        UniqueConstraint("user_id", "category", "period", name="uq_budget_category_period"),
    )

    id = Column(String, unique=True, index=True, nullable=False, default=new_id("budget"))
    user_id = Column(String, nullable=False, index=True)
    category = Column(String, nullable=False)
    limit = Column(Numeric(12, 2), nullable=False)
    period = Column(String, nullable=False, default="monthly")
    spent = Column(Numeric(12, 2), nullable=False, default=0)
    start_date = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
