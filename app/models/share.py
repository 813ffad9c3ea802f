from datetime import datetime
from typing import Dict, Optional

from app.db.models.enums import ShareType, SharePlatform
from .base import CamelModel


class ShareRequest(CamelModel):
    share_type: ShareType = ShareType.NATIVE
    platform: SharePlatform = SharePlatform.APP
    user_agent: Optional[str] = None
    user_id: Optional[int] = None


class ShareResponse(CamelModel):
    id: int
    post_id: int
    user_id: Optional[int] = None
    share_type: ShareType
    platform: SharePlatform
    user_agent: Optional[str] = None
    shared_at: datetime


class ShareStatsResponse(CamelModel):
    post_id: int
    total_shares: int
    share_type_stats: Dict[str, int]
