import logging

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.db.models import Comment, Notification, NotificationType, Post, User
from app.db.store import EntityStore
from app.models.comment import CommentCreate, CommentUpdate

logger = logging.getLogger(__name__)


class CommentService:
    """Service for creating and editing comments on posts."""

    def __init__(self, db: Session):
        self.db = db
        self.store = EntityStore(db, Comment)
        self.posts = EntityStore(db, Post)
        self.users = EntityStore(db, User)
        self.notifications = EntityStore(db, Notification)

    def get_comment(self, comment_id: int) -> Comment:
        comment = self.store.find_by_id(comment_id)
        if comment is None:
            raise NotFoundError(f"Comment with id {comment_id} not found")
        return comment

    def create_comment(self, post_id: int, comment_data: CommentCreate) -> Comment:
        """
        Add a comment to a post and notify the post's author.

        Args:
            post_id: The post being commented on
            comment_data: Author id and comment text

        Returns:
            The persisted comment

        Raises:
            NotFoundError: If the post or the commenting user does not exist
        """
        post = self.posts.find_by_id(post_id)
        if post is None:
            logger.warning(f"Post not found for comment: {post_id}")
            raise NotFoundError(f"Post with id {post_id} not found")

        author = self.users.find_by_id(comment_data.user_id)
        if author is None or not author.is_active:
            raise NotFoundError(f"User with id {comment_data.user_id} not found")

        comment = self.store.save(Comment(
            post_id=post.id,
            user_id=author.id,
            content=comment_data.content,
        ))

        if post.user_id != author.id:
            self.notifications.save(Notification(
                user_id=post.user_id,
                type=NotificationType.COMMENT,
                message=f"{author.name} commented on your post",
            ))

        logger.info(f"Successfully created comment {comment.id} for post {post_id} by user {author.id}")
        return comment

    def update_comment(self, comment_id: int, comment_data: CommentUpdate) -> Comment:
        comment = self.get_comment(comment_id)
        comment.content = comment_data.content
        comment.is_edited = True
        return self.store.save(comment)

    def delete_comment(self, comment_id: int) -> None:
        comment = self.get_comment(comment_id)
        self.store.delete(comment)
        logger.info(f"Deleted comment {comment_id}")
