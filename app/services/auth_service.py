# app/services/auth_service.py
import logging
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.core.auth import create_access_token
from app.core.config import get_settings
from app.core.errors import (
    AccountLocked,
    EmailAlreadyRegistered,
    InvalidCredentials,
    MissingCredentialInput,
    ProviderVerificationFailed,
)
from app.core.google_client import GoogleClient, GoogleIdentity
from app.core.security import hash_password, verify_password
from app.models.account import Account
from app.models.notification import Notification
from app.models.user import User
from app.repositories.account_repo import AccountRepository
from app.repositories.notification_repo import NotificationRepository
from app.repositories.user_repo import UserRepository
from app.schemas.auth import (
    GoogleLoginRequest,
    LoginData,
    PasswordLoginRequest,
    PublicUser,
    RegisterRequest,
)

logger = logging.getLogger(__name__)

settings = get_settings()

# Created for every new user
DEFAULT_ACCOUNT = {
    "name": "Cash wallet",
    "type": "CASH",
    "balance": 0,
    "icon": "💵",
    "color": "#4CAF50",
}

WELCOME_NOTIFICATION = {
    "title": "Welcome to EasyFin! 🎉",
    "message": "Start managing your finances today.",
    "type": "INFO",
    "category": "SYSTEM",
}


def _default_name_from_email(email: str) -> str:
    """Local part of the email, used when no display name is known."""
    if "@" in email:
        return email.split("@", 1)[0]
    return email


class AuthService:
    """
    Identity resolution and session issuance.

    Login attempt lifecycle:

      Start -> ResolvingIdentity -> ReconcilingUser -> IssuingSession -> Done

    Any step may end the attempt with an AppError (see app.core.errors);
    failures are terminal and nothing is retried.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        account_repo: AccountRepository,
        notification_repo: NotificationRepository,
    ):
        self.user_repo = user_repo
        self.account_repo = account_repo
        self.notification_repo = notification_repo

    # -------- Login flows --------

    def login_with_google(
        self,
        session: Session,
        google: GoogleClient,
        payload: GoogleLoginRequest,
    ) -> LoginData:
        """
        JSON login with an ID token (`credential`/`idToken`) or an access token.

        The ID token wins when both are sent.

        Raises:
            MissingCredentialInput: neither proof present (400).
            ProviderVerificationFailed: Google rejected the proof (401).
            MissingIdentityEmail: Google returned no email (400).
            AccountLocked: user is inactive (403).
        """
        if payload.id_token:
            identity = google.verify_id_token(payload.id_token)
        elif payload.accessToken:
            identity = google.fetch_userinfo(payload.accessToken)
        else:
            raise MissingCredentialInput()

        user = self.reconcile_google_user(session, identity)
        return self.issue_session(user)

    def login_with_code(
        self,
        session: Session,
        google: GoogleClient,
        code: str,
        callback_url: str,
    ) -> LoginData:
        """
        Authorization-code login (used by the OAuth callback).

        Steps:
          1. Exchange the code for Google tokens.
          2. Fetch the profile with the returned access token.
          3. Reconcile and issue a session.
        """
        tokens = google.exchange_code(code, callback_url)
        try:
            identity = google.fetch_userinfo(tokens["access_token"])
        except ProviderVerificationFailed:
            raise ProviderVerificationFailed("Failed to get user info")

        user = self.reconcile_google_user(session, identity)
        return self.issue_session(user)

    def login_with_password(
        self,
        session: Session,
        payload: PasswordLoginRequest,
    ) -> LoginData:
        """
        Email/password login.

        Google-only accounts have an empty password hash and always fail here.
        """
        user = self.user_repo.get_by_email(session, payload.email)
        if user is None or not verify_password(payload.password, user.password_hash):
            raise InvalidCredentials()
        if not user.is_active:
            raise AccountLocked()
        return self.issue_session(user)

    def register(self, session: Session, payload: RegisterRequest) -> LoginData:
        """
        Create a local account and log it in.

        Raises:
            EmailAlreadyRegistered: if the normalized email already exists (409).
        """
        email = payload.email.strip().lower()
        if self.user_repo.get_by_email(session, email) is not None:
            raise EmailAlreadyRegistered()

        user = User(
            email=email,
            name=payload.name or _default_name_from_email(email),
            password_hash=hash_password(payload.password),
            role="user",
            is_active=True,
        )
        try:
            user = self._provision_user(session, user)
        except IntegrityError:
            session.rollback()
            raise EmailAlreadyRegistered()

        logger.info("Registered new user %s", user.id)
        return self.issue_session(user)

    # -------- Reconciliation --------

    def reconcile_google_user(
        self,
        session: Session,
        identity: GoogleIdentity,
    ) -> User:
        """
        Find-or-create the local user for a Google identity.

        Rules:
          - lookup key is the lower-cased email
          - new users get role="user", active, empty password, plus one
            default account and one welcome notification, all committed
            in the same transaction
          - existing users without an avatar get Google's picture backfilled
          - inactive users end the attempt with AccountLocked

        A concurrent login that created the same email first makes our
        insert fail on the unique index; we roll back and use its row.
        """
        email = identity.require_email()
        user = self.user_repo.get_by_email(session, email)

        if user is None:
            new_user = User(
                email=email,
                name=identity.name or _default_name_from_email(email),
                avatar=identity.picture,
                role="user",
                is_active=True,
                password_hash="",
            )
            try:
                user = self._provision_user(session, new_user)
                logger.info("Created user %s from Google login", user.id)
            except IntegrityError:
                session.rollback()
                logger.warning("Concurrent signup for %s, reusing existing user", email)
                user = self.user_repo.get_by_email(session, email)
                if user is None:
                    raise
        elif not user.avatar and identity.picture:
            user.avatar = identity.picture
            user.updated_at = datetime.now(timezone.utc)
            user = self.user_repo.update(session, user)

        if not user.is_active:
            raise AccountLocked()
        return user

    def _provision_user(self, session: Session, user: User) -> User:
        """
        Insert user, default account and welcome notification, then commit once.
        """
        user = self.user_repo.add(session, user)
        self.account_repo.add(
            session,
            Account(
                user_id=user.id,
                currency=settings.DEFAULT_CURRENCY,
                **DEFAULT_ACCOUNT,
            ),
        )
        self.notification_repo.add(
            session,
            Notification(user_id=user.id, **WELCOME_NOTIFICATION),
        )
        session.commit()
        session.refresh(user)
        return user

    # -------- Session issuance --------

    def issue_session(self, user: User) -> LoginData:
        """Sign a session token and pair it with the public user profile."""
        return LoginData(
            accessToken=create_access_token(user),
            user=PublicUser.model_validate(user, from_attributes=True),
        )
