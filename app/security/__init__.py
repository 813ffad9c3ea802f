"""
Security module for issuing and checking API tokens.
"""
from .jwt import create_access_token, create_refresh_token, decode_token, verify_refresh_token

__all__ = [
    "create_access_token",
    "create_refresh_token",
    "decode_token",
    "verify_refresh_token"
]
