import logging

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.db.models import Notification, User
from app.db.store import EntityStore
from app.models.notification import NotificationCreate, NotificationResponse
from app.schemas.page import Page

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, db: Session):
        self.db = db
        self.store = EntityStore(db, Notification)
        self.users = EntityStore(db, User)

    def get_notification(self, notification_id: int) -> Notification:
        notification = self.store.find_by_id(notification_id)
        if notification is None:
            raise NotFoundError(f"Notification with id {notification_id} not found")
        return notification

    def list_for_user(self, user_id: int, page: int = 0, size: int = 20) -> Page[NotificationResponse]:
        """A user's notifications, newest first."""
        rows = self.store.find_by(order_by="created_at", limit=size, offset=page * size, user_id=user_id)
        return Page[NotificationResponse](
            content=[NotificationResponse.model_validate(n) for n in rows],
            page=page,
            size=size,
            total_elements=self.store.count(user_id=user_id),
        )

    def list_all(self, page: int = 0, size: int = 20) -> Page[NotificationResponse]:
        rows = self.store.find_by(order_by="created_at", limit=size, offset=page * size)
        return Page[NotificationResponse](
            content=[NotificationResponse.model_validate(n) for n in rows],
            page=page,
            size=size,
            total_elements=self.store.count(),
        )

    def create(self, data: NotificationCreate) -> Notification:
        if not self.users.exists(data.user_id):
            raise NotFoundError(f"User with id {data.user_id} not found")
        notification = self.store.save(Notification(**data.model_dump()))
        logger.info(f"Created {data.type.value} notification {notification.id} for user {data.user_id}")
        return notification

    def mark_read(self, notification_id: int) -> Notification:
        notification = self.get_notification(notification_id)
        if not notification.is_read:
            notification.is_read = True
            notification = self.store.save(notification)
        return notification

    def delete(self, notification_id: int) -> None:
        if not self.store.delete_by_id(notification_id):
            raise NotFoundError(f"Notification with id {notification_id} not found")
