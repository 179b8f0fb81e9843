# app/services/account_service.py
import uuid

from sqlmodel import Session

from app.models.account import Account
from app.repositories.account_repo import AccountRepository


class AccountService:
    """Read access to financial accounts."""

    def __init__(self, repo: AccountRepository):
        self.repo = repo

    def list_my_accounts(self, session: Session, user_id: uuid.UUID) -> list[Account]:
        return self.repo.list_for_user(session, user_id)

    def list_accounts(
        self,
        session: Session,
        user_id: uuid.UUID | None,
        skip: int,
        limit: int,
    ) -> list[Account]:
        """Admin listing, optionally filtered by owner."""
        return self.repo.list_all(session, user_id=user_id, skip=skip, limit=limit)
