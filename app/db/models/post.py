from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from app.core.clock import utcnow
from .enums import MediaType, enum_column_type
from ..base import Base

class Post(Base):
    __tablename__ = 'posts'

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False, default="")
    media_url = Column(String(1024))
    media_type = Column(enum_column_type(MediaType))
    upvotes = Column(Integer, default=0, nullable=False)
    shares = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    # Relationships; dependents are removed together with the post
    user = relationship("User", back_populates="posts")
    comments = relationship("Comment", back_populates="post", cascade="all, delete-orphan")
    share_log = relationship("Share", back_populates="post", cascade="all, delete-orphan")
    fact_checks = relationship("FactCheck", back_populates="post", cascade="all, delete-orphan")
