from datetime import datetime
from typing import List, Optional

from app.models.base import CamelModel


class UserPostSummary(CamelModel):
    id: int
    question: str
    answer: str
    upvotes: int
    comments_count: int
    shares: int
    created_at: datetime


class ProfileSummary(CamelModel):
    """Compact user entry for follower/following listings."""

    id: int
    name: str
    avatar: Optional[str] = None
    credentials: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    join_date: datetime


class UserProfile(ProfileSummary):
    followers_count: int
    following_count: int
    posts_count: int
    is_current_user: bool
    is_following: bool
    posts: List[UserPostSummary]
