from typing import List, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, StorageError
from app.db.models import Comment, Follow, Post, User
from app.db.store import EntityStore
from app.schemas.page import Page
from app.schemas.user_profile import ProfileSummary, UserPostSummary, UserProfile
from app.services.follow_service import FollowService

logger = logging.getLogger(__name__)

RECENT_POSTS_LIMIT = 5


class UserProfileService:
    """Read-side composition of a user's profile and social listings."""

    def __init__(self, db: Session):
        self.db = db
        self.users = EntityStore(db, User)
        self.posts = EntityStore(db, Post)
        self.comments = EntityStore(db, Comment)
        self.follow_service = FollowService(db)

    def _find_active(self, user_id: int) -> Optional[User]:
        user = self.users.find_by_id(user_id)
        if user is None or not user.is_active:
            return None
        return user

    def get_profile(self, user_id: int, viewer_id: Optional[int] = None) -> UserProfile:
        """
        Compose a user's profile as seen by ``viewer_id``.

        Args:
            user_id: The profile owner
            viewer_id: Optional id of the user looking at the profile

        Returns:
            UserProfile with follow counts, relationship flags and up to
            five recent post summaries

        Raises:
            NotFoundError: If the user does not exist or is deactivated
        """
        user = self._find_active(user_id)
        if user is None:
            raise NotFoundError(f"User with id {user_id} not found")

        is_current_user = viewer_id is not None and viewer_id == user.id
        is_following = False
        if viewer_id is not None and not is_current_user:
            is_following = self.follow_service.is_following(viewer_id, user.id)

        recent = self.posts.find_by(order_by="created_at", limit=RECENT_POSTS_LIMIT, user_id=user.id)

        return UserProfile(
            **self._summary(user).model_dump(),
            followers_count=self._edge_count(Follow.followed_user_id, Follow.follower_id, user.id),
            following_count=self._edge_count(Follow.follower_id, Follow.followed_user_id, user.id),
            posts_count=self.posts.count(user_id=user.id),
            is_current_user=is_current_user,
            is_following=is_following,
            posts=[self._post_summary(post) for post in recent],
        )

    def get_posts(self, user_id: int, page: int = 0, size: int = 10) -> Page[UserPostSummary]:
        """A user's posts, newest first. Unknown users yield an empty page."""
        if self._find_active(user_id) is None:
            return Page[UserPostSummary].empty(page, size)

        rows = self.posts.find_by(order_by="created_at", limit=size, offset=page * size, user_id=user_id)
        return Page[UserPostSummary](
            content=[self._post_summary(post) for post in rows],
            page=page,
            size=size,
            total_elements=self.posts.count(user_id=user_id),
        )

    def get_followers(self, user_id: int, page: int = 0, size: int = 20) -> Page[ProfileSummary]:
        """Users following ``user_id``, most recent follow first."""
        if self._find_active(user_id) is None:
            return Page[ProfileSummary].empty(page, size)
        return self._edge_page(Follow.followed_user_id, Follow.follower_id, user_id, page, size)

    def get_following(self, user_id: int, page: int = 0, size: int = 20) -> Page[ProfileSummary]:
        """Users that ``user_id`` follows, most recent follow first."""
        if self._find_active(user_id) is None:
            return Page[ProfileSummary].empty(page, size)
        return self._edge_page(Follow.follower_id, Follow.followed_user_id, user_id, page, size)

    def _edge_query(self, anchor, other, user_id: int):
        # Deactivated accounts drop out of both counts and listings
        return (
            self.db.query(User)
            .join(Follow, other == User.id)
            .filter(anchor == user_id, User.is_active.is_(True))
        )

    def _edge_count(self, anchor, other, user_id: int) -> int:
        try:
            return self._edge_query(anchor, other, user_id).count()
        except SQLAlchemyError as e:
            logger.error(f"Error counting follow edges for user {user_id}: {e}")
            raise StorageError("Failed to count follow edges") from e

    def _edge_page(self, anchor, other, user_id: int, page: int, size: int) -> Page[ProfileSummary]:
        try:
            query = self._edge_query(anchor, other, user_id)
            total = query.count()
            users: List[User] = (
                query.order_by(Follow.followed_at.desc(), Follow.id.desc())
                .offset(page * size)
                .limit(size)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Error listing follow edges for user {user_id}: {e}")
            raise StorageError("Failed to load follow listing") from e

        return Page[ProfileSummary](
            content=[self._summary(user) for user in users],
            page=page,
            size=size,
            total_elements=total,
        )

    @staticmethod
    def _summary(user: User) -> ProfileSummary:
        return ProfileSummary(
            id=user.id,
            name=user.name,
            avatar=user.avatar,
            credentials=user.credentials,
            bio=user.bio,
            location=user.location,
            website=user.website,
            join_date=user.created_at,
        )

    def _post_summary(self, post: Post) -> UserPostSummary:
        return UserPostSummary(
            id=post.id,
            question=post.question,
            answer=post.answer or "",
            upvotes=post.upvotes,
            comments_count=self.comments.count(post_id=post.id),
            shares=post.shares,
            created_at=post.created_at,
        )
