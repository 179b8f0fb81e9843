from sqlmodel import Session

from app.core.auth import decode_access_token
from app.core.google_client import GoogleIdentity
from app.database import engine
from app.models.account import Account
from app.models.notification import Notification
from app.models.user import User
from app.repositories.account_repo import AccountRepository
from app.repositories.notification_repo import NotificationRepository
from app.repositories.user_repo import UserRepository
from app.services.auth_service import AuthService


class LateUserRepository(UserRepository):
    """
    Misses the user on the first lookup, as if another request created it
    between our lookup and our insert.
    """

    def __init__(self):
        self.lookups = 0

    def get_by_email(self, session, email):
        self.lookups += 1
        if self.lookups == 1:
            return None
        return super().get_by_email(session, email)


def test_concurrent_signup_reuses_the_winning_user(make_user, rows):
    winner = make_user(email="race@gmail.com")
    repo = LateUserRepository()
    service = AuthService(repo, AccountRepository(), NotificationRepository())

    with Session(engine) as session:
        user = service.reconcile_google_user(
            session,
            GoogleIdentity(email="Race@Gmail.com", name="Racer"),
        )
        data = service.issue_session(user)

    assert user.id == winner.id
    assert repo.lookups == 2
    assert len(rows(User)) == 1
    assert rows(Account) == []
    assert rows(Notification) == []
    assert decode_access_token(data.accessToken)["userId"] == str(winner.id)


def test_new_google_user_is_provisioned_in_one_go(rows):
    service = AuthService(UserRepository(), AccountRepository(), NotificationRepository())

    with Session(engine) as session:
        user = service.reconcile_google_user(
            session,
            GoogleIdentity(email="fresh@gmail.com"),
        )

    assert user.name == "fresh"
    assert len(rows(Account, user_id=user.id)) == 1
    assert len(rows(Notification, user_id=user.id)) == 1
