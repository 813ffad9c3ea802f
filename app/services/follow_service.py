import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.core.exceptions import InvalidOperationError, NotFoundError
from app.db.models import Follow, FollowType, Notification, NotificationType, User
from app.db.store import EntityStore
from app.models.follow import FollowAction

logger = logging.getLogger(__name__)


class FollowService:
    """Service for maintaining user-to-user follow edges."""

    def __init__(self, db: Session):
        self.db = db
        self.users = EntityStore(db, User)
        self.follows = EntityStore(db, Follow)
        self.notifications = EntityStore(db, Notification)

    def _active_user(self, user_id: int) -> User:
        user = self.users.find_by_id(user_id)
        if user is None or not user.is_active:
            raise NotFoundError(f"User with id {user_id} not found")
        return user

    def find_edge(self, follower_id: int, target_id: int) -> Optional[Follow]:
        return self.follows.find_first(
            follower_id=follower_id,
            followed_user_id=target_id,
            type=FollowType.USER,
        )

    def is_following(self, follower_id: int, target_id: int) -> bool:
        if follower_id == target_id:
            return False
        return self.find_edge(follower_id, target_id) is not None

    def toggle_follow(self, follower_id: int, target_id: int) -> FollowAction:
        """
        Flip the follow edge between two users.

        Args:
            follower_id: The acting user
            target_id: The user to follow or unfollow

        Returns:
            FollowAction.UNFOLLOWED when an existing edge was removed,
            FollowAction.FOLLOWED when a new edge was created

        Raises:
            InvalidOperationError: If a user tries to follow themselves
            NotFoundError: If either user does not exist or is deactivated
        """
        if follower_id == target_id:
            logger.warning(f"User {follower_id} attempted to follow themselves")
            raise InvalidOperationError("Users cannot follow themselves")

        follower = self._active_user(follower_id)
        self._active_user(target_id)

        existing = self.find_edge(follower_id, target_id)
        if existing is not None:
            self.follows.delete(existing)
            logger.info(f"User {follower_id} unfollowed user {target_id}")
            return FollowAction.UNFOLLOWED

        self.follows.save(Follow(
            follower_id=follower_id,
            followed_user_id=target_id,
            type=FollowType.USER,
        ))
        self.notifications.save(Notification(
            user_id=target_id,
            type=NotificationType.FOLLOW,
            message=f"{follower.name} started following you",
        ))
        logger.info(f"User {follower_id} followed user {target_id}")
        return FollowAction.FOLLOWED
