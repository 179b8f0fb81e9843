# app/core/config.py
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# Used only when JWT_SECRET is not configured outside production.
INSECURE_DEV_JWT_SECRET = "easyfin-dev-secret-change-me"


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Typical .env:
      - DATABASE_URL (Postgres connection string; SQLite is fine locally)
      - JWT_SECRET (signing secret for session tokens)
      - GOOGLE_CLIENT_ID / GOOGLE_CLIENT_SECRET (OAuth client)

    Optional:
      - PUBLIC_BASE_URL (backend origin used to build the OAuth callback URL)
      - ALLOWED_REDIRECT_PREFIXES (deep links the callback may redirect to)
      - CORS_ALLOWED_ORIGINS (browser origins accepted in production)
    """

    PROJECT_NAME: str = "EasyFin API"
    API_PREFIX: str = "/api"
    ENVIRONMENT: Literal["development", "production"] = "development"

    # Database
    DATABASE_URL: str = "sqlite:///./easyfin.db"

    # Session tokens
    JWT_SECRET: str | None = None
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7

    # Google OAuth
    GOOGLE_CLIENT_ID: str | None = None
    GOOGLE_CLIENT_SECRET: str | None = None
    # Empty list => the `aud` claim of ID tokens is not checked
    GOOGLE_ALLOWED_AUDIENCES: list[str] = []
    GOOGLE_HTTP_TIMEOUT: float = 10.0

    PUBLIC_BASE_URL: str | None = None

    # Mobile app deep link used when the caller did not send one
    APP_REDIRECT_URI: str = "easyfin-login://login"
    ALLOWED_REDIRECT_PREFIXES: list[str] = ["easyfin-login://"]

    CORS_ALLOWED_ORIGINS: list[str] = [
        "https://dangnghia.me",
        "https://admin.dangnghia.me",
        "http://localhost:3001",
        "http://localhost:3002",
        "http://localhost:8081",
    ]

    DEFAULT_CURRENCY: str = "VND"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def jwt_secret(self) -> str:
        """
        Secret used to sign session tokens.

        Falls back to a hardcoded development secret when JWT_SECRET is unset.
        `ensure_secure()` refuses that fallback in production.
        """
        return self.JWT_SECRET or INSECURE_DEV_JWT_SECRET

    def ensure_secure(self) -> None:
        """
        Fail fast on configuration that must never reach production.

        Raises:
            RuntimeError: if running in production without JWT_SECRET.
        """
        if self.is_production and not self.JWT_SECRET:
            raise RuntimeError("JWT_SECRET must be set when ENVIRONMENT=production")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
