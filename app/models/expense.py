from sqlalchemy import Column, ForeignKey, Numeric, String, Date
from sqlalchemy.orm import relationship
from app.db.session import Base
from app.models.base import IdentityMixin, new_id

class GroupExpense(IdentityMixin, Base):
    __tablename__ = "group_expenses"

    id = Column(String, unique=True, index=True, nullable=False, default=new_id("exp"))
    group_id = Column(String, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True)
    paid_by = Column(String, ForeignKey("group_members.id", ondelete="CASCADE"), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    category = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    date = Column(Date, nullable=False)
    split_type = Column(String, nullable=False, default="equal")

    group = relationship("Group", back_populates="expenses")
    shares = relationship(
        "ExpenseShare",
        back_populates="expense",
        cascade="all, delete-orphan",
        order_by="ExpenseShare.seq",
        lazy="selectin",
    )
