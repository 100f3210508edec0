from sqlalchemy import Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship
from app.db.session import Base

class ExpenseShare(Base):
    __tablename__ = "expense_shares"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    expense_id = Column(String, ForeignKey("group_expenses.id", ondelete="CASCADE"), nullable=False, index=True)
    member_id = Column(String, ForeignKey("group_members.id", ondelete="CASCADE"), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)

    expense = relationship("GroupExpense", back_populates="shares")
