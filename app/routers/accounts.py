# app/routers/accounts.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import require_admin, require_auth
from app.database import get_session
from app.models.user import User
from app.repositories.account_repo import AccountRepository
from app.schemas.account import AccountRead
from app.services.account_service import AccountService

router = APIRouter(prefix="/accounts", tags=["Accounts"])

service = AccountService(AccountRepository())


@router.get("/me", response_model=list[AccountRead])
def list_my_accounts(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """List the authenticated user's accounts, oldest first."""
    return service.list_my_accounts(session, current_user.id)


@router.get(
    "",
    response_model=list[AccountRead],
    dependencies=[Depends(require_admin)],
)
def list_accounts(
    user_id: uuid.UUID | None = None,
    session: Session = Depends(get_session),
    skip: int = 0,
    limit: int = 50,
):
    """
    List all accounts (admin only).

    Query params (optional):
      - user_id: only accounts owned by this user
    """
    return service.list_accounts(session, user_id, skip, limit)
