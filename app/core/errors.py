# app/core/errors.py
"""
Domain errors for the login flows.

Every error carries the HTTP status it maps to and a human-readable
message. JSON endpoints render them through `app_error_handler` as:

    {"success": false, "error": "<message>"}

The redirect variant of Google login turns them into an `error=` query
parameter instead (see app/routers/auth.py).

Malformed request bodies on the auth routes use the same envelope (400)
so login clients only ever parse one error shape.
"""

import logging

from fastapi import Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.config import get_settings

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal Server Error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingCredentialInput(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Please provide idToken or accessToken"


class MissingIdentityEmail(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Unable to get email from Google"


class ProviderExchangeFailed(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Failed to exchange code"


class ProviderVerificationFailed(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid Google token"


class InvalidCredentials(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class InvalidRedirectUri(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "redirect_uri is not allowed"


class AccountLocked(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Account is locked"


class EmailAlreadyRegistered(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Email is already registered"


class InternalError(AppError):
    pass


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message},
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Render body validation failures on /auth/* as a 400 envelope.

    Other routes keep FastAPI's default 422 detail list.
    """
    auth_prefix = f"{get_settings().API_PREFIX}/auth/"
    if not request.url.path.startswith(auth_prefix):
        return await request_validation_exception_handler(request, exc)

    logger.info("Rejected %s body: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": "Invalid request body"},
    )
