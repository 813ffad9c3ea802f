from typing import Any, Dict, Optional
import logging

from google.auth import exceptions as google_exceptions
from google.auth.transport import requests
from google.oauth2 import id_token

from app.core.config import settings
from app.core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class IdentityVerifier:
    """Turns a client-supplied identity token into verified user claims."""

    def verify_identity(self, token: str) -> Dict[str, Any]:
        raise NotImplementedError


class FirebaseIdentityVerifier(IdentityVerifier):
    """Service for verifying Firebase ID tokens and extracting user information."""

    def __init__(self, project_id: Optional[str] = None):
        self.project_id = project_id or settings.FIREBASE_PROJECT_ID
        self._request = requests.Request()

    def verify_identity(self, token: str) -> Dict[str, Any]:
        """
        Verify a Firebase ID token and return user information.

        Args:
            token: The Firebase ID token to verify

        Returns:
            Dictionary with uid, email, name and picture

        Raises:
            AuthenticationError: If the token is invalid, expired or issued for another project
        """
        if not self.project_id:
            logger.error("FIREBASE_PROJECT_ID is not configured; cannot verify identity tokens")
            raise AuthenticationError("Identity verification is not configured")

        try:
            # Checks signature against Google's certs plus issuer and audience
            id_info = id_token.verify_firebase_token(token, self._request, audience=self.project_id)
        except (ValueError, google_exceptions.GoogleAuthError) as e:
            logger.warning(f"Firebase token verification failed: {str(e)}")
            raise AuthenticationError("Invalid identity token") from e

        if not id_info or not id_info.get("sub"):
            raise AuthenticationError("Identity token has no subject")

        return {
            "uid": id_info["sub"],
            "email": id_info.get("email"),
            "name": id_info.get("name"),
            "picture": id_info.get("picture"),
        }
