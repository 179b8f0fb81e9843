# app/schemas/notification.py
import uuid
from datetime import datetime
from typing import Literal

from sqlmodel import SQLModel

NotificationType = Literal["INFO", "SUCCESS", "WARNING", "ERROR"]
NotificationCategory = Literal["SYSTEM", "TRANSACTION", "BUDGET", "REMINDER"]


class NotificationRead(SQLModel):
    id: uuid.UUID
    user_id: uuid.UUID
    title: str
    message: str
    type: NotificationType
    category: NotificationCategory
    is_read: bool
    created_at: datetime
