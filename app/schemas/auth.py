# app/schemas/auth.py
import uuid

from pydantic import EmailStr, ConfigDict, field_validator
from sqlmodel import SQLModel, Field


class GoogleLoginRequest(SQLModel):
    """
    Body of POST /auth/google.

    Accepted proofs (first match wins):
      - credential: ID token from Google Identity Services (web)
      - idToken:    ID token from the mobile SDK
      - accessToken: OAuth access token (web token client / mobile)
    """

    accessToken: str | None = None
    credential: str | None = None
    idToken: str | None = None

    @property
    def id_token(self) -> str | None:
        return self.credential or self.idToken


class PasswordLoginRequest(SQLModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(min_length=1)


class RegisterRequest(SQLModel):
    """
    Local (email/password) registration.

    The name defaults to the local part of the email when omitted.
    """

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    name: str | None = Field(default=None, max_length=100)

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class PublicUser(SQLModel):
    """Public projection of a user. Never carries the password hash."""

    id: uuid.UUID
    email: str
    name: str
    avatar: str | None = None
    role: str


class LoginData(SQLModel):
    accessToken: str
    user: PublicUser


class LoginResponse(SQLModel):
    """Success envelope of the JSON login endpoints."""

    success: bool = True
    message: str = "Login successful"
    data: LoginData
