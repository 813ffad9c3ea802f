from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from .base import CamelModel


class UserCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    avatar: Optional[str] = None
    credentials: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None


class UserUpdate(CamelModel):
    """Partial update; omitted fields are left untouched."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    avatar: Optional[str] = None
    credentials: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None

    @field_validator("name", "email")
    @classmethod
    def reject_explicit_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value


class UserResponse(CamelModel):
    id: int
    name: str
    email: str
    avatar: Optional[str] = None
    credentials: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    created_at: datetime
