from datetime import datetime

from pydantic import Field

from app.db.models.enums import NotificationType
from .base import CamelModel


class NotificationCreate(CamelModel):
    user_id: int
    type: NotificationType
    message: str = Field(..., min_length=1, max_length=512)


class NotificationResponse(CamelModel):
    id: int
    user_id: int
    type: NotificationType
    message: str
    is_read: bool
    created_at: datetime
