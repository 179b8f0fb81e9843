# app/repositories/account_repo.py
import uuid

from sqlmodel import Session, select

from app.models.account import Account


class AccountRepository:
    """
    Data access layer for accounts.

    No commits here; accounts are created inside the user
    provisioning transaction.
    """

    def list_for_user(self, session: Session, user_id: uuid.UUID) -> list[Account]:
        stmt = (
            select(Account)
            .where(Account.user_id == user_id)
            .order_by(Account.created_at)
        )
        return session.exec(stmt).all()

    def list_all(
        self,
        session: Session,
        user_id: uuid.UUID | None = None,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Account]:
        stmt = select(Account)
        if user_id is not None:
            stmt = stmt.where(Account.user_id == user_id)
        stmt = stmt.order_by(Account.created_at.desc()).offset(skip).limit(limit)
        return session.exec(stmt).all()

    def add(self, session: Session, account: Account) -> Account:
        session.add(account)
        session.flush()
        return account
