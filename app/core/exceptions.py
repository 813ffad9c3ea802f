"""
Service-level exceptions.

Services raise these; the handlers registered in ``app.main`` turn them into
HTTP responses so endpoint code does not need to translate them one by one.
"""
from typing import Optional


class BisaError(Exception):
    """Base class for errors raised by the service layer."""

    error_code = "INTERNAL_ERROR"

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code


class NotFoundError(BisaError):
    """Raised when a referenced entity does not exist."""

    error_code = "NOT_FOUND"


class InvalidOperationError(BisaError):
    """Raised for malformed input or a forbidden operation such as a self-follow."""

    error_code = "INVALID_OPERATION"


class AuthenticationError(BisaError):
    """Raised when the caller's identity cannot be established."""

    error_code = "INVALID_TOKEN"


class ProviderUnavailableError(BisaError):
    """Raised inside the fact-check provider when the external service fails.

    Never leaves the provider adapter: it is caught there and replaced with
    the local fallback analysis.
    """

    error_code = "PROVIDER_UNAVAILABLE"


class StorageError(BisaError):
    """Raised when a database operation fails."""

    error_code = "STORAGE_ERROR"
