import enum
from sqlalchemy import Enum

class MediaType(str, enum.Enum):
    IMAGE = "image"
    VIDEO = "video"

class ShareType(str, enum.Enum):
    NATIVE = "native"
    TWITTER = "twitter"
    FACEBOOK = "facebook"
    WHATSAPP = "whatsapp"
    TELEGRAM = "telegram"
    COPY_LINK = "copy_link"
    COPY_TEXT = "copy_text"

class SharePlatform(str, enum.Enum):
    APP = "app"
    WEB = "web"
    MOBILE = "mobile"

class ValidityStatus(str, enum.Enum):
    TRUE = "TRUE"
    FALSE = "FALSE"
    MISLEADING = "MISLEADING"
    UNVERIFIABLE = "UNVERIFIABLE"
    PARTIALLY_TRUE = "PARTIALLY_TRUE"

class ConfidenceLevel(str, enum.Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

class FollowType(str, enum.Enum):
    USER = "user"
    TOPIC = "topic"
    SPACE = "space"

class NotificationType(str, enum.Enum):
    ANSWER = "answer"
    COMMENT = "comment"
    FOLLOW = "follow"
    MENTION = "mention"
    UPVOTE = "upvote"


def enum_column_type(enum_cls):
    """String-backed SQLAlchemy Enum that persists member values, not names."""
    return Enum(
        enum_cls,
        native_enum=False,
        length=32,
        values_callable=lambda members: [member.value for member in members],
        validate_strings=True,
    )
