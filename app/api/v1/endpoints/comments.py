from fastapi import APIRouter, Depends, Response, status
import logging

from app.models.comment import CommentResponse, CommentUpdate
from app.services.comment_service import CommentService
from app.db.session import get_db
from sqlalchemy.orm import Session

router = APIRouter()

# Use the standard logger
logger = logging.getLogger(__name__)

@router.get("/{comment_id}", response_model=CommentResponse)
def get_comment(comment_id: int, db: Session = Depends(get_db)):
    return CommentService(db).get_comment(comment_id)


@router.put("/{comment_id}", response_model=CommentResponse)
def update_comment(
    comment_id: int,
    comment_data: CommentUpdate,
    db: Session = Depends(get_db)
):
    """
    Replace the text of a comment.

    Args:
        comment_id: The comment to edit
        comment_data: The new content from request body
        db: Database session

    Returns:
        The updated comment, flagged as edited

    Raises:
        NotFoundError: 404 if the comment doesn't exist
    """
    logger.info(f"Editing comment {comment_id}")
    return CommentService(db).update_comment(comment_id, comment_data)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(comment_id: int, db: Session = Depends(get_db)):
    CommentService(db).delete_comment(comment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
