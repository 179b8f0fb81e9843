# app/core/auth.py
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlmodel import Session

from app.core.config import get_settings
from app.database import get_session
from app.models.user import User

settings = get_settings()

# HTTP Bearer scheme:
# - auto_error=False => a missing Authorization header does not raise
#   inside the scheme, so we can answer with our own 401 message.
bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(
    user: User,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Mint a signed session token for a reconciled, active user.

    Claims:
      - sub / userId: user id (string)
      - email, role
      - iat, exp (issue time + ACCESS_TOKEN_EXPIRE_DAYS, 7 days by default)

    Tokens are stateless: there is no server-side revocation list, a token
    stays valid until `exp` as long as the signing secret is unchanged.
    """
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)

    payload = {
        "sub": str(user.id),
        "userId": str(user.id),
        "email": user.email,
        "role": user.role,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify a session token.

    Verification:
      - signature (JWT_SECRET / JWT_ALGORITHM)
      - expiration time (exp)

    Raises:
        HTTPException(401): if token is invalid/expired.
    """
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> User:
    """
    Resolve the current user from the bearer session token.

    Flow:
      1. Missing Authorization header => 401.
      2. Decode JWT => extract user id.
      3. Load the user; unknown ids => 401.
      4. Locked users => 401, so clients drop their stored session.

    Returns:
        The authenticated User.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    payload = decode_access_token(credentials.credentials)
    raw_id = payload.get("userId") or payload.get("sub")

    try:
        user_id = uuid.UUID(str(raw_id))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user id in token",
        )

    user = session.get(User, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account is locked",
        )
    return user


def require_auth(user: User = Depends(get_current_user)) -> User:
    """Enforce authentication (401 for guests or bad tokens)."""
    return user


def require_admin(user: User = Depends(require_auth)) -> User:
    """
    Enforce admin role.

    Raises:
        HTTPException(403): if role is not admin.
    """
    if user.role != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user
