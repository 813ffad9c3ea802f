from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text
from sqlalchemy.orm import relationship
from app.core.clock import utcnow
from ..base import Base

class User(Base):
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    avatar = Column(String(512))
    credentials = Column(String(255))
    bio = Column(Text)
    location = Column(String(255))
    website = Column(String(512))
    firebase_uid = Column(String(128), unique=True, index=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    # Relationships
    posts = relationship("Post", back_populates="user")
