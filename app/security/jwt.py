from typing import Dict, Any, Optional
from datetime import datetime, timedelta, timezone
from jose import jwt
from jose.exceptions import JWTError, ExpiredSignatureError
import logging

from app.core.config import settings

logger = logging.getLogger(__name__)


def _create_token(user_id: int, token_type: str, expires_in: int) -> str:
    now = datetime.now(timezone.utc)
    to_encode = {
        "userId": str(user_id),
        "type": token_type,
        "exp": now + timedelta(seconds=expires_in),
        "iat": now,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_access_token(user_id: int, expires_in: Optional[int] = None) -> str:
    """
    Create a signed JWT access token for a user.

    Args:
        user_id: The user's unique identifier in the system
        expires_in: Token expiration duration in seconds (default: ACCESS_TOKEN_EXPIRE_MINUTES)

    Returns:
        Encoded JWT token as a string
    """
    if expires_in is None:
        expires_in = settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
    token = _create_token(user_id, "access", expires_in)
    logger.info(f"Successfully created access token for user {user_id}")
    return token


def create_refresh_token(user_id: int, expires_in: Optional[int] = None) -> str:
    """
    Create a signed JWT refresh token for a user.

    Args:
        user_id: The user's unique identifier in the system
        expires_in: Token expiration duration in seconds (default: REFRESH_TOKEN_EXPIRE_DAYS)

    Returns:
        Encoded JWT token as a string
    """
    if expires_in is None:
        expires_in = settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60
    token = _create_token(user_id, "refresh", expires_in)
    logger.info(f"Successfully created refresh token for user {user_id}")
    return token


def decode_token(token: str) -> Dict[str, Any]:
    """
    Decode and verify a JWT token.

    Args:
        token: The JWT token to decode

    Returns:
        Dictionary with 'success': True and token claims if valid,
        or 'success': False with 'error': 'TOKEN_EXPIRED' or 'INVALID_TOKEN'
    """
    try:
        decoded_token = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return {"success": True, "payload": decoded_token}
    except ExpiredSignatureError:
        logger.warning("Token expired during decoding")
        return {"success": False, "error": "TOKEN_EXPIRED"}
    except JWTError as e:
        logger.warning(f"Token decoding failed due to invalid signature or other JWT error: {str(e)}")
        return {"success": False, "error": "INVALID_TOKEN"}


def verify_refresh_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Verify a refresh token and return its payload if valid.

    Args:
        token: The refresh JWT token to verify

    Returns:
        Dictionary with token claims if valid, None if invalid, expired or not a refresh token
    """
    decoded = decode_token(token)
    if not decoded["success"]:
        return None

    payload = decoded["payload"]
    if payload.get("type") != "refresh":
        logger.warning("Token is not a refresh token")
        return None

    logger.info(f"Refresh token verified for user {payload.get('userId')}")
    return payload
