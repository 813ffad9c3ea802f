from typing import Optional
import logging
from fastapi import Depends, Header, HTTPException, status, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.security.jwt import decode_token

logger = logging.getLogger(__name__)

# auto_error is off so requests identified by X-User-Id pass through
bearer_scheme = HTTPBearer(bearerFormat="JWT", auto_error=False)


def _unauthorized(error: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": error, "message": message}
    )


def _user_id_from_token(token: str) -> int:
    decoded_data = decode_token(token)

    if not decoded_data.get("success"):
        if decoded_data.get("error") == "TOKEN_EXPIRED":
            logger.warning('Token expired during authentication')
            raise _unauthorized("TOKEN_EXPIRED", "Token has expired")
        logger.warning('Invalid token during authentication')
        raise _unauthorized("INVALID_TOKEN", "Invalid authentication token")

    payload = decoded_data["payload"]
    token_type = payload.get('type')
    if token_type != 'access':
        logger.warning(f'Invalid token type provided: {token_type}')
        raise _unauthorized("INVALID_TOKEN", "Invalid token type, expected 'access'")

    try:
        return int(payload.get('userId'))
    except (TypeError, ValueError):
        logger.warning('Token missing userId claim')
        raise _unauthorized("INVALID_TOKEN", "Invalid token: missing user ID")


def get_current_user_id(
    x_user_id: Optional[str] = Header(None, alias="X-User-Id"),
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme)
) -> Optional[int]:
    """
    Dependency that resolves the acting user, if any.

    The ``X-User-Id`` header wins when present; otherwise a bearer access
    token is decoded. Returns None for anonymous requests.
    """
    if x_user_id is not None:
        try:
            return int(x_user_id)
        except ValueError:
            logger.warning(f"Malformed X-User-Id header: {x_user_id!r}")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"error": "INVALID_USER_ID", "message": "X-User-Id must be an integer"}
            )

    if credentials is not None:
        return _user_id_from_token(credentials.credentials)

    return None


def require_current_user_id(user_id: Optional[int] = Depends(get_current_user_id)) -> int:
    """Same as get_current_user_id but rejects anonymous requests with 401."""
    if user_id is None:
        raise _unauthorized("AUTHENTICATION_REQUIRED", "X-User-Id header or bearer token required")
    return user_id


# Alias for protected routes
login_required = Depends(require_current_user_id)
