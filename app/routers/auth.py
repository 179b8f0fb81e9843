# app/routers/auth.py
import json
import logging
from urllib.parse import quote, urlencode

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse
from sqlmodel import Session

from app.core.auth import require_auth
from app.core.config import get_settings
from app.core.errors import AppError, InternalError, InvalidRedirectUri
from app.core.google_client import GoogleClient, get_google_client
from app.database import get_session
from app.models.user import User
from app.repositories.account_repo import AccountRepository
from app.repositories.notification_repo import NotificationRepository
from app.repositories.user_repo import UserRepository
from app.schemas.auth import (
    GoogleLoginRequest,
    LoginResponse,
    PasswordLoginRequest,
    PublicUser,
    RegisterRequest,
)
from app.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])

settings = get_settings()

service = AuthService(UserRepository(), AccountRepository(), NotificationRepository())


def _callback_url(request: Request) -> str:
    """
    Backend URL Google redirects to after consent.

    Start and callback must compute exactly the same value, otherwise the
    code exchange is rejected by Google.
    """
    if settings.PUBLIC_BASE_URL:
        base_url = settings.PUBLIC_BASE_URL.rstrip("/")
    else:
        scheme = "https" if settings.is_production else "http"
        base_url = f"{scheme}://{request.headers.get('host')}"
    return f"{base_url}{settings.API_PREFIX}/auth/google/callback"


def _is_allowed_redirect(uri: str) -> bool:
    return any(uri.startswith(prefix) for prefix in settings.ALLOWED_REDIRECT_PREFIXES)


def _redirect_with(target: str, params: dict[str, str]) -> RedirectResponse:
    separator = "&" if "?" in target else "?"
    return RedirectResponse(
        url=f"{target}{separator}{urlencode(params, quote_via=quote)}",
        status_code=status.HTTP_302_FOUND,
    )


# -------- Google: JSON variant --------


@router.post("/google", response_model=LoginResponse)
def google_login(
    payload: GoogleLoginRequest | None = None,
    session: Session = Depends(get_session),
    google: GoogleClient = Depends(get_google_client),
):
    """
    Log in / sign up with Google from web (GSI credential) or mobile
    (idToken or accessToken).

    Responses:
      - 200 {"success": true, "data": {"accessToken", "user"}}
      - 400 missing proof / no email, 401 rejected by Google,
        403 account locked, 500 unexpected error
    """
    payload = payload or GoogleLoginRequest()
    try:
        data = service.login_with_google(session, google, payload)
    except AppError:
        raise
    except Exception:
        logger.exception("Google auth error")
        raise InternalError("An error occurred while logging in")
    return LoginResponse(data=data)


# -------- Google: authorization code / deep-link variant --------


@router.get("/google/start")
def google_start(
    request: Request,
    redirect_uri: str | None = None,
    google: GoogleClient = Depends(get_google_client),
):
    """
    Redirect the browser to Google's consent screen.

    `redirect_uri` is the app deep link to return to; it travels through
    Google as the OAuth `state` and must match ALLOWED_REDIRECT_PREFIXES.
    """
    if not settings.GOOGLE_CLIENT_ID:
        raise InternalError("GOOGLE_CLIENT_ID is not defined")

    app_redirect_uri = redirect_uri or settings.APP_REDIRECT_URI
    if not _is_allowed_redirect(app_redirect_uri):
        raise InvalidRedirectUri()

    url = google.build_authorize_url(_callback_url(request), state=app_redirect_uri)
    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)


@router.get("/google/callback")
def google_callback(
    request: Request,
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
    session: Session = Depends(get_session),
    google: GoogleClient = Depends(get_google_client),
):
    """
    OAuth callback. Always answers with a redirect to the app deep link:

      - success: <deep link>?success=true&token=<jwt>&user=<json>
      - failure: <deep link>?error=<message>

    A `state` outside the allow-list is never redirected to; the default
    deep link receives the error instead and no login is attempted.
    """
    if state and not _is_allowed_redirect(state):
        logger.warning("Rejected OAuth callback state %r", state)
        return _redirect_with(
            settings.APP_REDIRECT_URI, {"error": InvalidRedirectUri.default_message}
        )

    app_redirect_uri = state or settings.APP_REDIRECT_URI

    if error or not code:
        return _redirect_with(app_redirect_uri, {"error": error or "No code returned"})

    try:
        data = service.login_with_code(session, google, code, _callback_url(request))
    except AppError as e:
        return _redirect_with(app_redirect_uri, {"error": e.message})
    except Exception:
        logger.exception("Google callback error")
        return _redirect_with(app_redirect_uri, {"error": "Internal Server Error"})

    return _redirect_with(
        app_redirect_uri,
        {
            "success": "true",
            "token": data.accessToken,
            "user": json.dumps(data.user.model_dump(mode="json"), separators=(",", ":")),
        },
    )


# -------- Email / password --------


@router.post("/login", response_model=LoginResponse)
def password_login(
    payload: PasswordLoginRequest,
    session: Session = Depends(get_session),
):
    """Admin dashboard login with email and password."""
    return LoginResponse(data=service.login_with_password(session, payload))


@router.post(
    "/register",
    response_model=LoginResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(
    payload: RegisterRequest,
    session: Session = Depends(get_session),
):
    """
    Create a local account, its default cash wallet and welcome
    notification, and return a session for it.
    """
    return LoginResponse(
        message="Registration successful",
        data=service.register(session, payload),
    )


@router.get("/me", response_model=PublicUser)
def read_me(current_user: User = Depends(require_auth)):
    """Return the authenticated user's public profile."""
    return current_user
