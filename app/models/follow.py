import enum

from .base import CamelModel


class FollowAction(str, enum.Enum):
    FOLLOWED = "FOLLOWED"
    UNFOLLOWED = "UNFOLLOWED"


class FollowToggleResponse(CamelModel):
    action: FollowAction
    message: str
    follower_id: int
    followed_user_id: int
