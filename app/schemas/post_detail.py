from datetime import datetime
from typing import Dict, List, Optional

from app.db.models.enums import ConfidenceLevel, MediaType, ValidityStatus
from app.models.base import CamelModel


class UserInfo(CamelModel):
    id: int
    name: str
    avatar: Optional[str] = None
    credentials: Optional[str] = None
    is_following: bool = False


class CommentInfo(CamelModel):
    id: int
    user: UserInfo
    content: str
    created_at: datetime
    # Comment votes are not modeled
    upvotes: int = 0


class FactCheckInfo(CamelModel):
    id: int
    validity_status: ValidityStatus
    accuracy_score: float
    confidence_level: ConfidenceLevel
    checked_by: str
    checked_at: datetime
    summary: str


class ShareStats(CamelModel):
    total_shares: int
    share_type_breakdown: Dict[str, int]
    platform_breakdown: Dict[str, int]


class PostStats(CamelModel):
    """Engagement figures derived from counters; there is no view tracking."""

    view_count: int
    unique_viewers: int
    engagement_rate: float
    last_viewed: datetime


class PostDetail(CamelModel):
    id: int
    user: UserInfo
    question: str
    answer: str
    media_url: Optional[str] = None
    media_type: Optional[MediaType] = None
    upvotes: int
    shares: int
    comments_count: int
    created_at: datetime
    is_upvoted: bool = False
    is_bookmarked: bool = False
    comments: List[CommentInfo]
    fact_check: Optional[FactCheckInfo] = None
    share_stats: ShareStats
    stats: PostStats
