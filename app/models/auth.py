from pydantic import Field

from .base import CamelModel
from .user import UserResponse


class SignInRequest(CamelModel):
    token: str = Field(..., min_length=1, description="Firebase ID token issued to the client")


class SignInResponse(CamelModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    created: bool
    user: UserResponse


class RefreshTokenRequest(CamelModel):
    refresh_token: str


class RefreshTokenResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
