# app/models/notification.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Notification(SQLModel, table=True):
    """
    In-app message addressed to a single user.
    """

    __tablename__ = "notifications"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    user_id: uuid.UUID = Field(
        foreign_key="users.id",
        index=True,
    )

    title: str = Field(max_length=200)
    message: str

    # INFO | SUCCESS | WARNING | ERROR
    type: str = Field(default="INFO")

    # SYSTEM | TRANSACTION | BUDGET | REMINDER
    category: str = Field(default="SYSTEM", index=True)

    is_read: bool = Field(default=False)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
