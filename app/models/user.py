# app/models/user.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Persistent EasyFin user.

    Identity:
      - email is the reconciliation key for every login path
        (password, Google code exchange, ID token, access token).
        It is always stored lower-cased, so the unique index is
        effectively case-insensitive.

    Role:
      - "user" | "admin"

    Password:
      - password_hash is an argon2 hash for local accounts and the
        empty string for Google-only accounts (which can never log in
        by password).
    """

    __tablename__ = "users"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    email: str = Field(
        unique=True,
        index=True,
        description="Lower-cased email address",
    )

    name: str = Field(
        max_length=100,
        description="Display name; local part of the email by default",
    )

    avatar: str | None = Field(
        default=None,
        max_length=1024,
        description="Avatar URL (usually the Google profile picture)",
    )

    role: str = Field(
        default="user",
        index=True,
        description="Application role: user | admin",
    )

    is_active: bool = Field(
        default=True,
        description="Locked accounts cannot obtain a session token",
    )

    password_hash: str = Field(
        default="",
        description="Argon2 hash; empty for OAuth-only accounts",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last modification timestamp (UTC)",
    )
