from pydantic import Field
from datetime import datetime

from .base import CamelModel


class CommentCreate(CamelModel):
    """
    Pydantic model for creating a new comment on a post.

    Ensures that the `content` field is a non-empty string.
    """

    user_id: int
    content: str = Field(..., min_length=1, description="The content of the comment, must not be empty.")


class CommentUpdate(CamelModel):
    content: str = Field(..., min_length=1)


class CommentResponse(CamelModel):
    id: int
    post_id: int
    user_id: int
    content: str
    is_edited: bool
    created_at: datetime
