# app/schemas/user.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict
from sqlmodel import SQLModel

Role = Literal["user", "admin"]


class UserRead(SQLModel):
    """Admin view of a user."""

    id: uuid.UUID
    email: str
    name: str
    avatar: str | None = None
    role: Role
    is_active: bool
    created_at: datetime


class UserRoleUpdate(SQLModel):
    """
    Admin-only role update schema.
    """

    model_config = ConfigDict(extra="forbid")
    role: Role


class UserStatusUpdate(SQLModel):
    """
    Admin-only lock/unlock schema.

    Locked users (is_active=false) cannot log in by any method.
    """

    model_config = ConfigDict(extra="forbid")
    is_active: bool
