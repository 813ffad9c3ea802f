from typing import List, Optional
import logging

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.db.models import Post, Share, User
from app.db.store import EntityStore
from app.models.post import PostCreate, PostResponse, PostUpdate
from app.models.share import ShareRequest
from app.schemas.page import Page

logger = logging.getLogger(__name__)


class PostService:
    """Service for post CRUD and the counters driven by upvote/share actions."""

    def __init__(self, db: Session):
        self.db = db
        self.store = EntityStore(db, Post)
        self.shares = EntityStore(db, Share)
        self.users = EntityStore(db, User)

    def get_post(self, post_id: int) -> Post:
        post = self.store.find_by_id(post_id)
        if post is None:
            raise NotFoundError(f"Post with id {post_id} not found")
        return post

    def list_posts(self, page: int = 0, size: int = 10) -> Page[PostResponse]:
        rows = self.store.find_by(order_by="created_at", limit=size, offset=page * size)
        return Page[PostResponse](
            content=[PostResponse.model_validate(post) for post in rows],
            page=page,
            size=size,
            total_elements=self.store.count(),
        )

    def create_post(self, post_data: PostCreate) -> Post:
        """
        Create a post for an existing author.

        Raises:
            NotFoundError: If the author does not exist or is deactivated
        """
        author = self.users.find_by_id(post_data.user_id)
        if author is None or not author.is_active:
            raise NotFoundError(f"User with id {post_data.user_id} not found")

        post = self.store.save(Post(**post_data.model_dump()))
        logger.info(f"User {author.id} created post {post.id}")
        return post

    def update_post(self, post_id: int, post_data: PostUpdate) -> Post:
        post = self.get_post(post_id)
        for field, value in post_data.model_dump(exclude_unset=True).items():
            setattr(post, field, value)
        return self.store.save(post)

    def delete_post(self, post_id: int) -> None:
        """Delete a post together with its comments, shares and fact checks."""
        post = self.get_post(post_id)
        self.store.delete(post)
        logger.info(f"Deleted post {post_id}")

    def upvote(self, post_id: int) -> Post:
        post = self.get_post(post_id)
        post.upvotes = (post.upvotes or 0) + 1
        return self.store.save(post)

    def share(self, post_id: int, request: Optional[ShareRequest] = None) -> Post:
        """
        Record a share of the post.

        Increments the post's share counter and appends an entry to the share log.

        Args:
            post_id: The shared post
            request: Share channel details; defaults to a native share from the app

        Returns:
            The updated post

        Raises:
            NotFoundError: If the post, or the sharing user when given, does not exist
        """
        request = request or ShareRequest()
        post = self.get_post(post_id)
        if request.user_id is not None:
            sharer = self.users.find_by_id(request.user_id)
            if sharer is None or not sharer.is_active:
                raise NotFoundError(f"User with id {request.user_id} not found")
        post.shares = (post.shares or 0) + 1
        self.db.add(Share(
            post_id=post.id,
            user_id=request.user_id,
            share_type=request.share_type,
            platform=request.platform,
            user_agent=request.user_agent,
        ))
        post = self.store.save(post)
        logger.info(f"Post {post_id} shared via {request.share_type.value} on {request.platform.value}")
        return post

    def list_shares(self, post_id: int) -> List[Share]:
        self.get_post(post_id)
        return self.shares.find_by(order_by="shared_at", post_id=post_id)
