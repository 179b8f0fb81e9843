# app/repositories/notification_repo.py
import uuid

from sqlmodel import Session, select

from app.models.notification import Notification


class NotificationRepository:
    """
    Data access layer for notifications.
    """

    def get_by_id(
        self, session: Session, notification_id: uuid.UUID
    ) -> Notification | None:
        return session.get(Notification, notification_id)

    def list_for_user(
        self,
        session: Session,
        user_id: uuid.UUID,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Notification]:
        stmt = (
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        return session.exec(stmt).all()

    def list_all(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Notification]:
        stmt = (
            select(Notification)
            .order_by(Notification.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        return session.exec(stmt).all()

    def add(self, session: Session, notification: Notification) -> Notification:
        """Insert without committing (part of user provisioning)."""
        session.add(notification)
        session.flush()
        return notification

    def update(self, session: Session, notification: Notification) -> Notification:
        session.add(notification)
        session.commit()
        session.refresh(notification)
        return notification
