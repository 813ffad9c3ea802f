from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from app.core.clock import utcnow
from .enums import FollowType, enum_column_type
from ..base import Base

class Follow(Base):
    __tablename__ = 'follows'

    id = Column(Integer, primary_key=True, index=True)
    follower_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    followed_user_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    type = Column(enum_column_type(FollowType), nullable=False, default=FollowType.USER)
    followed_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint('follower_id', 'followed_user_id', 'type', name='uq_follow_edge'),
    )

    # Relationships
    follower = relationship("User", foreign_keys=[follower_id])
    followed_user = relationship("User", foreign_keys=[followed_user_id])
