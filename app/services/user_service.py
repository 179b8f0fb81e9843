# app/services/user_service.py
import uuid
from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlmodel import Session

from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.schemas.user import UserRoleUpdate, UserStatusUpdate


class UserService:
    """
    Business logic for user administration.

    Responsibilities:
      - orchestrate repository operations
      - map missing rows to HTTP errors
      - stop admins from locking or demoting themselves
    """

    def __init__(self, repo: UserRepository):
        self.repo = repo

    def list_users(self, session: Session, skip: int, limit: int) -> list[User]:
        """List users with pagination (admin only)."""
        return self.repo.list(session, skip=skip, limit=limit)

    def get_user(self, session: Session, user_id: uuid.UUID) -> User:
        """
        Get a user by id (admin only).

        Raises:
            HTTPException(404): if not found.
        """
        user = self.repo.get_by_id(session, user_id)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )
        return user

    def update_role(
        self,
        session: Session,
        acting_admin: User,
        user_id: uuid.UUID,
        payload: UserRoleUpdate,
    ) -> User:
        """
        Change user's role (admin only).

        Role validation is enforced by the schema (Literal).
        """
        user = self.get_user(session, user_id)
        if user.id == acting_admin.id and payload.role != "admin":
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Admins cannot demote themselves",
            )
        user.role = payload.role
        user.updated_at = datetime.now(timezone.utc)
        return self.repo.update(session, user)

    def update_status(
        self,
        session: Session,
        acting_admin: User,
        user_id: uuid.UUID,
        payload: UserStatusUpdate,
    ) -> User:
        """
        Lock or unlock a user (admin only).

        Existing session tokens of a locked user stop working on the next
        request, because every authenticated request re-reads is_active.
        """
        user = self.get_user(session, user_id)
        if user.id == acting_admin.id and not payload.is_active:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Admins cannot lock themselves",
            )
        user.is_active = payload.is_active
        user.updated_at = datetime.now(timezone.utc)
        return self.repo.update(session, user)
