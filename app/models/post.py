from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from app.db.models.enums import MediaType
from .base import CamelModel


class PostCreate(CamelModel):
    user_id: int
    question: str = Field(..., min_length=1)
    answer: str = ""
    media_url: Optional[str] = None
    media_type: Optional[MediaType] = None


class PostUpdate(CamelModel):
    question: Optional[str] = Field(None, min_length=1)
    answer: Optional[str] = None
    media_url: Optional[str] = None
    media_type: Optional[MediaType] = None

    @field_validator("question", "answer")
    @classmethod
    def reject_explicit_null(cls, value: Optional[str]) -> str:
        # Omit the field to keep it; the columns are NOT NULL
        if value is None:
            raise ValueError("must not be null")
        return value


class PostResponse(CamelModel):
    id: int
    user_id: int
    question: str
    answer: str
    media_url: Optional[str] = None
    media_type: Optional[MediaType] = None
    upvotes: int
    shares: int
    created_at: datetime
