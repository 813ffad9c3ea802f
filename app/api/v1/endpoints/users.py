import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.api.deps import PageParams, WidePageParams
from app.db.session import get_db
from app.middleware.auth import login_required
from app.models.follow import FollowAction, FollowToggleResponse
from app.models.user import UserCreate, UserResponse, UserUpdate
from app.schemas.page import Page
from app.schemas.user_profile import ProfileSummary, UserPostSummary, UserProfile
from app.services.follow_service import FollowService
from app.services.user_profile import UserProfileService
from app.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[UserResponse])
def list_users(db: Session = Depends(get_db)):
    return UserService(db).list_users()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(user_data: UserCreate, db: Session = Depends(get_db)):
    return UserService(db).create_user(user_data)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, db: Session = Depends(get_db)):
    return UserService(db).get_user(user_id)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(user_id: int, user_data: UserUpdate, db: Session = Depends(get_db)):
    return UserService(db).update_user(user_id, user_data)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, db: Session = Depends(get_db)):
    """
    Soft delete a user account by deactivating it.
    The user's posts stay in place; the account stops resolving on lookups.
    """
    UserService(db).delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{user_id}/follow", response_model=FollowToggleResponse)
def toggle_follow(
    user_id: int,
    follower_id: int = login_required,
    db: Session = Depends(get_db)
):
    """
    Follow the user, or unfollow when the caller already follows them.

    Args:
        user_id: The user to follow or unfollow
        follower_id: Acting user from the X-User-Id header or bearer token
        db: Database session

    Returns:
        The action that was applied

    Raises:
        InvalidOperationError: 400 when following yourself
        NotFoundError: 404 when either user is unknown
    """
    action = FollowService(db).toggle_follow(follower_id, user_id)
    message = (
        "Successfully followed user"
        if action == FollowAction.FOLLOWED
        else "Successfully unfollowed user"
    )
    return FollowToggleResponse(
        action=action,
        message=message,
        follower_id=follower_id,
        followed_user_id=user_id,
    )


@router.get("/{user_id}/profile", response_model=UserProfile)
def get_profile(
    user_id: int,
    current_user_id: Optional[int] = Query(None, alias="currentUserId"),
    db: Session = Depends(get_db)
):
    logger.info(f"Retrieving profile for user {user_id} (viewer={current_user_id})")
    return UserProfileService(db).get_profile(user_id, current_user_id)


@router.get("/{user_id}/posts", response_model=Page[UserPostSummary])
def get_user_posts(user_id: int, paging: PageParams = Depends(), db: Session = Depends(get_db)):
    return UserProfileService(db).get_posts(user_id, paging.page, paging.size)


@router.get("/{user_id}/followers", response_model=Page[ProfileSummary])
def get_followers(user_id: int, paging: WidePageParams = Depends(), db: Session = Depends(get_db)):
    return UserProfileService(db).get_followers(user_id, paging.page, paging.size)


@router.get("/{user_id}/following", response_model=Page[ProfileSummary])
def get_following(user_id: int, paging: WidePageParams = Depends(), db: Session = Depends(get_db)):
    return UserProfileService(db).get_following(user_id, paging.page, paging.size)
