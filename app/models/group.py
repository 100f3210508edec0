from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from app.db.session import Base
from app.models.base import IdentityMixin, new_id, utcnow

class Group(IdentityMixin, Base):
    __tablename__ = "groups"

    id = Column(String, unique=True, index=True, nullable=False, default=new_id("grp"))
    name = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    emoji = Column(String, nullable=False, default="👥")
    owner_id = Column(String, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    members = relationship(
        "GroupMember",
        back_populates="group",
        cascade="all, delete-orphan",
        order_by="GroupMember.seq",
        lazy="selectin",
    )
    expenses = relationship(
        "GroupExpense",
        back_populates="group",
        cascade="all, delete-orphan",
        order_by="GroupExpense.seq",
        lazy="selectin",
    )
