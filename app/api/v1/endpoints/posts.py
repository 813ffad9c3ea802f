import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.api.deps import PageParams, get_fact_check_provider
from app.db.session import get_db
from app.models.comment import CommentCreate, CommentResponse
from app.models.fact_check import FactCheckResponse, FactCheckStatus
from app.models.post import PostCreate, PostResponse, PostUpdate
from app.models.share import ShareRequest, ShareResponse, ShareStatsResponse
from app.schemas.page import Page
from app.schemas.post_detail import CommentInfo, PostDetail
from app.services.comment_service import CommentService
from app.services.fact_check.provider import FactCheckProvider
from app.services.fact_check.service import FactCheckService
from app.services.post_detail import PostDetailService
from app.services.post_service import PostService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_fact_check_service(
    db: Session = Depends(get_db),
    provider: FactCheckProvider = Depends(get_fact_check_provider)
) -> FactCheckService:
    return FactCheckService(db, provider)


@router.get("", response_model=Page[PostResponse])
def list_posts(paging: PageParams = Depends(), db: Session = Depends(get_db)):
    return PostService(db).list_posts(paging.page, paging.size)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(post_data: PostCreate, db: Session = Depends(get_db)):
    return PostService(db).create_post(post_data)


@router.get("/{post_id}", response_model=PostResponse)
def get_post(post_id: int, db: Session = Depends(get_db)):
    return PostService(db).get_post(post_id)


@router.put("/{post_id}", response_model=PostResponse)
def update_post(post_id: int, post_data: PostUpdate, db: Session = Depends(get_db)):
    return PostService(db).update_post(post_id, post_data)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(post_id: int, db: Session = Depends(get_db)):
    """Delete a post; its comments, shares and fact checks go with it."""
    PostService(db).delete_post(post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{post_id}/detail", response_model=PostDetail)
def get_post_detail(
    post_id: int,
    current_user_id: Optional[int] = Query(None, alias="currentUserId"),
    db: Session = Depends(get_db)
):
    """
    Retrieve the aggregated detail view of a post.

    Args:
        post_id: The post to describe
        current_user_id: Optional viewer, used for the author's isFollowing flag
        db: Database session

    Returns:
        PostDetail with comment preview, latest fact check and share statistics
    """
    logger.info(f"Retrieving detail for post {post_id} (viewer={current_user_id})")
    return PostDetailService(db).get_detail(post_id, current_user_id)


@router.post("/{post_id}/upvote", response_model=PostResponse)
def upvote_post(post_id: int, db: Session = Depends(get_db)):
    return PostService(db).upvote(post_id)


@router.post("/{post_id}/share", response_model=PostResponse)
def share_post(
    post_id: int,
    share_request: Optional[ShareRequest] = Body(None),
    db: Session = Depends(get_db)
):
    """Record a share; an empty body counts as a native share from the app."""
    return PostService(db).share(post_id, share_request)


@router.get("/{post_id}/shares", response_model=List[ShareResponse])
def list_shares(post_id: int, db: Session = Depends(get_db)):
    return PostService(db).list_shares(post_id)


@router.get("/{post_id}/shares/stats", response_model=ShareStatsResponse)
def share_stats(post_id: int, db: Session = Depends(get_db)):
    PostService(db).get_post(post_id)
    stats = PostDetailService(db).share_stats(post_id)
    return ShareStatsResponse(
        post_id=post_id,
        total_shares=stats.total_shares,
        share_type_stats=stats.share_type_breakdown,
    )


@router.get("/{post_id}/comments", response_model=Page[CommentInfo])
def list_comments(post_id: int, paging: PageParams = Depends(), db: Session = Depends(get_db)):
    return PostDetailService(db).get_comments(post_id, paging.page, paging.size)


@router.post("/{post_id}/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def create_comment(post_id: int, comment_data: CommentCreate, db: Session = Depends(get_db)):
    """
    Create a new comment for a post.

    Args:
        post_id: The ID of the post to comment on
        comment_data: Author id and comment content from request body
        db: Database session

    Returns:
        The created comment

    Raises:
        NotFoundError: 404 if the post or the author doesn't exist
    """
    return CommentService(db).create_comment(post_id, comment_data)


@router.post("/{post_id}/fact-check", response_model=FactCheckResponse)
def fact_check_post(
    post_id: int,
    checked_by: str = Query("system", alias="checkedBy"),
    db: Session = Depends(get_db),
    fact_checks: FactCheckService = Depends(get_fact_check_service)
):
    """
    Fact-check a post, reusing a result from the last 24 hours when there is one.

    Args:
        post_id: The post to check
        checked_by: Identifier recorded on a newly created check
        db: Database session
        fact_checks: Orchestrator bound to this request's session

    Returns:
        The latest fact check for the post
    """
    post = PostService(db).get_post(post_id)
    return fact_checks.check_post(post, checked_by)


@router.get("/{post_id}/fact-check", response_model=FactCheckResponse)
def get_fact_check(
    post_id: int,
    db: Session = Depends(get_db),
    fact_checks: FactCheckService = Depends(get_fact_check_service)
):
    post = PostService(db).get_post(post_id)
    latest = fact_checks.latest(post)
    if latest is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return latest


@router.get("/{post_id}/fact-check/history", response_model=List[FactCheckResponse])
def get_fact_check_history(
    post_id: int,
    db: Session = Depends(get_db),
    fact_checks: FactCheckService = Depends(get_fact_check_service)
):
    post = PostService(db).get_post(post_id)
    return fact_checks.history(post)


@router.get("/{post_id}/fact-check/status", response_model=FactCheckStatus)
def get_fact_check_status(
    post_id: int,
    db: Session = Depends(get_db),
    fact_checks: FactCheckService = Depends(get_fact_check_service)
):
    post = PostService(db).get_post(post_id)
    latest = fact_checks.latest(post)
    if latest is None:
        return FactCheckStatus(has_fact_check=False)
    return FactCheckStatus(
        has_fact_check=True,
        last_checked=latest.checked_at,
        validity_status=latest.validity_status.value,
        accuracy_score=latest.accuracy_score,
        confidence_level=latest.confidence_level,
    )
