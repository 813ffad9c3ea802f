from typing import Dict, Optional
import logging

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, StorageError
from app.db.models import Comment, FactCheck, Post, Share, User
from app.db.store import EntityStore
from app.schemas.page import Page
from app.schemas.post_detail import (
    CommentInfo,
    FactCheckInfo,
    PostDetail,
    PostStats,
    ShareStats,
    UserInfo,
)
from app.services.follow_service import FollowService

logger = logging.getLogger(__name__)

COMMENT_PREVIEW_SIZE = 10


class PostDetailService:
    """
    Builds the denormalized post view shown on the post screen.

    Every part is read with its own query; there is no transaction spanning
    them, so the view is best-effort consistent.
    """

    def __init__(self, db: Session):
        self.db = db
        self.posts = EntityStore(db, Post)
        self.comments = EntityStore(db, Comment)
        self.fact_checks = EntityStore(db, FactCheck)
        self.follows = FollowService(db)

    def get_detail(self, post_id: int, viewer_id: Optional[int] = None) -> PostDetail:
        """
        Compose the full detail view of a post.

        Args:
            post_id: The post to describe
            viewer_id: Optional id of the user looking at the post

        Returns:
            PostDetail with author, comment preview, latest fact check,
            share statistics and derived engagement figures

        Raises:
            NotFoundError: If the post does not exist
        """
        post = self.posts.find_by_id(post_id)
        if post is None:
            raise NotFoundError(f"Post with id {post_id} not found")

        comments_count = self.comments.count(post_id=post.id)
        preview = self.comments.find_by(order_by="created_at", limit=COMMENT_PREVIEW_SIZE, post_id=post.id)
        latest = self.fact_checks.find_first(order_by="checked_at", post_id=post.id)

        logger.debug(f"Building detail for post {post.id}: {comments_count} comments, viewer={viewer_id}")

        return PostDetail(
            id=post.id,
            user=self._user_info(post.user, viewer_id),
            question=post.question,
            answer=post.answer or "",
            media_url=post.media_url,
            media_type=post.media_type,
            upvotes=post.upvotes,
            shares=post.shares,
            comments_count=comments_count,
            created_at=post.created_at,
            # Per-user upvotes and bookmarks are not recorded
            is_upvoted=False,
            is_bookmarked=False,
            comments=[self._comment_info(comment, viewer_id) for comment in preview],
            fact_check=self._fact_check_info(latest),
            share_stats=self.share_stats(post.id),
            stats=self._post_stats(post, comments_count),
        )

    def get_comments(self, post_id: int, page: int = 0, size: int = 10) -> Page[CommentInfo]:
        """Paged comments for a post, newest first."""
        if not self.posts.exists(post_id):
            raise NotFoundError(f"Post with id {post_id} not found")

        total = self.comments.count(post_id=post_id)
        rows = self.comments.find_by(
            order_by="created_at",
            limit=size,
            offset=page * size,
            post_id=post_id,
        )
        return Page[CommentInfo](
            content=[self._comment_info(comment, None) for comment in rows],
            page=page,
            size=size,
            total_elements=total,
        )

    def share_stats(self, post_id: int) -> ShareStats:
        """Group the full share log of a post by type and by platform."""
        by_type = self._group_shares(Share.share_type, post_id)
        by_platform = self._group_shares(Share.platform, post_id)
        return ShareStats(
            total_shares=sum(by_type.values()),
            share_type_breakdown=by_type,
            platform_breakdown=by_platform,
        )

    def _group_shares(self, column, post_id: int) -> Dict[str, int]:
        try:
            rows = (
                self.db.query(column, func.count(Share.id))
                .filter(Share.post_id == post_id)
                .group_by(column)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Error grouping shares for post {post_id}: {e}")
            raise StorageError("Failed to load share statistics") from e
        return {key.value: count for key, count in rows}

    def _user_info(self, user: User, viewer_id: Optional[int]) -> UserInfo:
        is_following = False
        if viewer_id is not None:
            is_following = self.follows.is_following(viewer_id, user.id)
        return UserInfo(
            id=user.id,
            name=user.name,
            avatar=user.avatar,
            credentials=user.credentials,
            is_following=is_following,
        )

    def _comment_info(self, comment: Comment, viewer_id: Optional[int]) -> CommentInfo:
        return CommentInfo(
            id=comment.id,
            user=self._user_info(comment.user, viewer_id),
            content=comment.content,
            created_at=comment.created_at,
        )

    @staticmethod
    def _fact_check_info(fact_check: Optional[FactCheck]) -> Optional[FactCheckInfo]:
        if fact_check is None:
            return None
        return FactCheckInfo(
            id=fact_check.id,
            validity_status=fact_check.validity_status,
            accuracy_score=fact_check.accuracy_score,
            confidence_level=fact_check.confidence_level,
            checked_by=fact_check.checked_by,
            checked_at=fact_check.checked_at,
            summary=fact_check.summary,
        )

    @staticmethod
    def _post_stats(post: Post, comments_count: int) -> PostStats:
        # No view tracking exists; interactions stand in for views
        interactions = post.upvotes + post.shares + comments_count
        return PostStats(
            view_count=interactions,
            unique_viewers=interactions,
            engagement_rate=engagement_rate(post.upvotes, post.shares, comments_count),
            last_viewed=post.created_at,
        )


def engagement_rate(upvotes: int, shares: int, comments: int) -> float:
    return (upvotes + shares + comments) / 100.0
