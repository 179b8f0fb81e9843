# app/routers/notifications.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import require_admin, require_auth
from app.database import get_session
from app.models.user import User
from app.repositories.notification_repo import NotificationRepository
from app.schemas.notification import NotificationRead
from app.services.notification_service import NotificationService

router = APIRouter(prefix="/notifications", tags=["Notifications"])

service = NotificationService(NotificationRepository())


@router.get("/me", response_model=list[NotificationRead])
def list_my_notifications(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
    skip: int = 0,
    limit: int = 50,
):
    """List the authenticated user's notifications, newest first."""
    return service.list_my_notifications(session, current_user.id, skip, limit)


@router.patch("/{notification_id}/read", response_model=NotificationRead)
def mark_notification_read(
    notification_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    return service.mark_read(session, current_user.id, notification_id)


@router.get(
    "",
    response_model=list[NotificationRead],
    dependencies=[Depends(require_admin)],
)
def list_notifications(
    session: Session = Depends(get_session),
    skip: int = 0,
    limit: int = 50,
):
    """List all notifications (admin only)."""
    return service.list_notifications(session, skip, limit)
