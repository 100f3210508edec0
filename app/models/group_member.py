from sqlalchemy import Column, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship
from app.db.session import Base
from app.models.base import IdentityMixin, new_id

class GroupMember(IdentityMixin, Base):
    __tablename__ = "group_members"
    __table_args__ = (
        UniqueConstraint("group_id", "email", name="uq_group_member_email"),
    )

    id = Column(String, unique=True, index=True, nullable=False, default=new_id("mem"))
    group_id = Column(String, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False)
    # set for members that are also app users
    user_id = Column(String, nullable=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=True)
    role = Column(String, nullable=False, default="member")

    group = relationship("Group", back_populates="members")
