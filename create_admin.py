# create_admin.py
import argparse

from sqlmodel import Session

from app.database import create_db_and_tables, engine
from app.repositories.account_repo import AccountRepository
from app.repositories.notification_repo import NotificationRepository
from app.repositories.user_repo import UserRepository
from app.schemas.auth import RegisterRequest
from app.services.auth_service import AuthService


def create_admin(email: str, password: str, name: str | None = None) -> str:
    """
    Create an admin account, or promote an existing user to admin.

    Returns a one-line status message.
    """
    user_repo = UserRepository()
    service = AuthService(user_repo, AccountRepository(), NotificationRepository())

    with Session(engine) as session:
        user = user_repo.get_by_email(session, email)
        if user is None:
            service.register(
                session,
                RegisterRequest(email=email, password=password, name=name),
            )
            user = user_repo.get_by_email(session, email)
            status = "created"
        else:
            status = "promoted"

        user.role = "admin"
        user.is_active = True
        user_repo.update(session, user)

    return f"Admin {email} {status}"


def main():
    parser = argparse.ArgumentParser(description="Create or promote an EasyFin admin")
    parser.add_argument("email")
    parser.add_argument("password")
    parser.add_argument("--name", default=None)
    args = parser.parse_args()

    create_db_and_tables()
    print(create_admin(args.email, args.password, args.name))


if __name__ == "__main__":
    main()
