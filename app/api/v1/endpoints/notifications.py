import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.api.deps import WidePageParams
from app.db.session import get_db
from app.models.notification import NotificationCreate, NotificationResponse
from app.schemas.page import Page
from app.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=Page[NotificationResponse])
def list_notifications(
    user_id: Optional[int] = Query(None, alias="userId"),
    paging: WidePageParams = Depends(),
    db: Session = Depends(get_db)
):
    """List notifications, newest first; ``userId`` narrows the listing to one recipient."""
    service = NotificationService(db)
    if user_id is not None:
        return service.list_for_user(user_id, paging.page, paging.size)
    return service.list_all(paging.page, paging.size)


@router.post("", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
def create_notification(data: NotificationCreate, db: Session = Depends(get_db)):
    return NotificationService(db).create(data)


@router.get("/{notification_id}", response_model=NotificationResponse)
def get_notification(notification_id: int, db: Session = Depends(get_db)):
    return NotificationService(db).get_notification(notification_id)


@router.post("/{notification_id}/read", response_model=NotificationResponse)
def mark_notification_read(notification_id: int, db: Session = Depends(get_db)):
    return NotificationService(db).mark_read(notification_id)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(notification_id: int, db: Session = Depends(get_db)):
    NotificationService(db).delete(notification_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
