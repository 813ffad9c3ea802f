from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.core.clock import utcnow
from .enums import ShareType, SharePlatform, enum_column_type
from ..base import Base

class Share(Base):
    """Append-only log entry; one row per share action."""
    __tablename__ = 'post_shares'

    id = Column(Integer, primary_key=True, index=True)
    post_id = Column(Integer, ForeignKey('posts.id'), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey('users.id'))
    share_type = Column(enum_column_type(ShareType), nullable=False, default=ShareType.NATIVE)
    platform = Column(enum_column_type(SharePlatform), nullable=False, default=SharePlatform.APP)
    user_agent = Column(String(512))
    shared_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    # Relationships
    post = relationship("Post", back_populates="share_log")
    user = relationship("User")
