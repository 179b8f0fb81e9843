# app/services/notification_service.py
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from app.models.notification import Notification
from app.repositories.notification_repo import NotificationRepository


class NotificationService:
    """
    Business logic for in-app notifications.

    Users only ever see and modify their own notifications; a foreign
    id is reported as 404 so ids do not leak.
    """

    def __init__(self, repo: NotificationRepository):
        self.repo = repo

    def list_my_notifications(
        self,
        session: Session,
        user_id: uuid.UUID,
        skip: int,
        limit: int,
    ) -> list[Notification]:
        return self.repo.list_for_user(session, user_id, skip=skip, limit=limit)

    def list_notifications(
        self, session: Session, skip: int, limit: int
    ) -> list[Notification]:
        """List all notifications (admin only)."""
        return self.repo.list_all(session, skip=skip, limit=limit)

    def mark_read(
        self,
        session: Session,
        user_id: uuid.UUID,
        notification_id: uuid.UUID,
    ) -> Notification:
        notification = self.repo.get_by_id(session, notification_id)
        if notification is None or notification.user_id != user_id:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Notification not found",
            )
        notification.is_read = True
        return self.repo.update(session, notification)
