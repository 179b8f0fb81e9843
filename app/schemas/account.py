# app/schemas/account.py
import uuid
from datetime import datetime
from typing import Literal

from sqlmodel import SQLModel

AccountType = Literal["CASH", "BANK", "CREDIT", "E_WALLET", "SAVINGS", "OTHER"]


class AccountRead(SQLModel):
    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    type: AccountType
    balance: float
    currency: str
    icon: str | None = None
    color: str | None = None
    created_at: datetime
