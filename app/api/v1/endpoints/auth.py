import logging
from fastapi import Depends, HTTPException, status, APIRouter
from sqlalchemy.orm import Session

from app.api.deps import get_identity_verifier
from app.db.session import get_db
from app.models.auth import (
    RefreshTokenRequest,
    RefreshTokenResponse,
    SignInRequest,
    SignInResponse,
)
from app.models.user import UserResponse
from app.security.jwt import create_access_token, create_refresh_token, verify_refresh_token
from app.services.auth.identity import IdentityVerifier
from app.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/refresh-token", response_model=RefreshTokenResponse)
def refresh_token(
    body: RefreshTokenRequest,
    db: Session = Depends(get_db)
):
    """
    Refresh an access token using a valid refresh token.

    Args:
        body: Request containing the refresh token
        db: Database session

    Returns:
        The new access token

    Raises:
        HTTPException: 403 for invalid or expired refresh tokens
    """
    token_payload = verify_refresh_token(body.refresh_token)
    if not token_payload:
        logger.warning("Invalid or expired refresh token provided")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"error": "REFRESH_TOKEN_INVALID"}
        )

    user_id = token_payload.get("userId")
    logger.info(f'Refresh token request received for user: {user_id}')

    # Check if user still exists and is active
    user = UserService(db).store.find_by_id(int(user_id))
    if not user or not user.is_active:
        logger.warning(f"User not found or account inactive for refresh token request: {user_id}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"error": "REFRESH_TOKEN_INVALID"}
        )

    logger.info(f"Access token refreshed for user: {user_id}")
    return RefreshTokenResponse(access_token=create_access_token(user.id))

@router.post("/firebase", response_model=SignInResponse)
def firebase_signin(
    request: SignInRequest,
    db: Session = Depends(get_db),
    verifier: IdentityVerifier = Depends(get_identity_verifier)
):
    """
    Exchange a Firebase ID token for API tokens.

    The verified identity is matched to a user by uid, then by email;
    a new user is created when neither matches.

    Raises:
        AuthenticationError: 401 if the identity token does not verify
        InvalidOperationError: 400 if the matching account is deactivated
    """
    identity = verifier.verify_identity(request.token)
    user, created = UserService(db).sign_in(identity)

    logger.info(f"Successful firebase sign-in for user {user.id} (created={created})")
    return SignInResponse(
        access_token=create_access_token(user.id),
        refresh_token=create_refresh_token(user.id),
        token_type="bearer",
        created=created,
        user=UserResponse.model_validate(user)
    )
