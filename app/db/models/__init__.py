# app/db/models/__init__.py

from .user import User
from .post import Post
from .comment import Comment
from .share import Share
from .fact_check import FactCheck
from .follow import Follow
from .notification import Notification
from .enums import (
    MediaType,
    ShareType,
    SharePlatform,
    ValidityStatus,
    ConfidenceLevel,
    FollowType,
    NotificationType,
)

__all__ = [
    'User',
    'Post',
    'Comment',
    'Share',
    'FactCheck',
    'Follow',
    'Notification',
    'MediaType',
    'ShareType',
    'SharePlatform',
    'ValidityStatus',
    'ConfidenceLevel',
    'FollowType',
    'NotificationType',
]
