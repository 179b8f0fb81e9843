# app/models/account.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Account(SQLModel, table=True):
    """
    A financial ledger bucket (wallet, bank account, card...) owned by one user.

    Every user gets one default CASH account with a zero balance when
    the user row is created.
    """

    __tablename__ = "accounts"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    user_id: uuid.UUID = Field(
        foreign_key="users.id",
        index=True,
    )

    name: str = Field(max_length=100)

    # CASH | BANK | CREDIT | E_WALLET | SAVINGS | OTHER
    type: str = Field(
        default="CASH",
        index=True,
        description="Account type tag",
    )

    balance: float = Field(
        default=0,
        description="Current balance in `currency`",
    )

    currency: str = Field(
        default="VND",
        max_length=3,
    )

    icon: str | None = Field(default=None, max_length=16)
    color: str | None = Field(default=None, max_length=16)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
