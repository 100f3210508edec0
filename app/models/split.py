from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import relationship
from app.db.session import Base
from app.models.base import IdentityMixin, new_id

class Split(IdentityMixin, Base):
    __tablename__ = "splits"

    id = Column(String, unique=True, index=True, nullable=False, default=new_id("split"))
    user_id = Column(String, nullable=False, index=True)
    title = Column(String, nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False)
    read = Column(Boolean, nullable=False, default=False)

    participants = relationship(
        "SplitParticipant",
        back_populates="split",
        cascade="all, delete-orphan",
        order_by="SplitParticipant.seq",
        lazy="selectin",
    )


class SplitParticipant(Base):
    __tablename__ = "split_participants"
    # ids may come from the client, so they only need to be unique within a split
    __table_args__ = (
        UniqueConstraint("split_id", "id", name="uq_participant_per_split"),
    )

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, index=True, nullable=False, default=new_id("p"))
    split_id = Column(String, ForeignKey("splits.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    share_amount = Column(Numeric(12, 2), nullable=False)
    paid_amount = Column(Numeric(12, 2), nullable=False, default=0)
    role = Column(String, nullable=False, default="participant")
    status = Column(String, nullable=False, default="pending")
    paid_at = Column(DateTime(timezone=True), nullable=True)

    split = relationship("Split", back_populates="participants")
