# app/core/google_client.py
"""
Thin client for the Google identity endpoints used by login.

Three kinds of proof are accepted from callers and all of them end up as
a `GoogleIdentity`:

  - authorization code  -> exchange_code() -> fetch_userinfo()
  - ID token/credential -> verify_id_token()   (verified by Google, never decoded locally)
  - access token        -> fetch_userinfo()

The authorization-code half (consent URL, code exchange) goes through
authlib's httpx OAuth2 client; tokeninfo and userinfo are plain httpx calls.
Failures raise the domain errors from app.core.errors; the provider's
response text is kept in the message so callers can surface it.
"""

import logging

import httpx
from authlib.integrations.httpx_client import OAuth2Client, OAuthError
from pydantic import BaseModel, field_validator

from app.core.config import Settings, get_settings
from app.core.errors import (
    MissingIdentityEmail,
    ProviderExchangeFailed,
    ProviderVerificationFailed,
)

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"
TOKENINFO_URL = "https://oauth2.googleapis.com/tokeninfo"
USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"

SCOPES = [
    "https://www.googleapis.com/auth/userinfo.profile",
    "https://www.googleapis.com/auth/userinfo.email",
]


def _json_object(response: httpx.Response) -> dict:
    """
    Decode a provider response body that must be a JSON object.

    Raises:
        ValueError: if the body is not JSON or not an object.
    """
    payload = response.json()
    if not isinstance(payload, dict):
        raise ValueError("expected a JSON object")
    return payload


class GoogleIdentity(BaseModel):
    """Normalized Google profile, whatever proof it came from."""

    email: str | None = None
    name: str | None = None
    picture: str | None = None
    email_verified: bool = False

    @field_validator("email_verified", mode="before")
    @classmethod
    def coerce_verified(cls, v) -> bool:
        # tokeninfo returns the string "true"; userinfo returns a boolean
        if isinstance(v, str):
            return v.strip().lower() == "true"
        return bool(v)

    def require_email(self) -> str:
        """
        Return the normalized (stripped, lower-cased) email.

        Raises:
            MissingIdentityEmail: if Google did not return one.
        """
        email = (self.email or "").strip().lower()
        if not email:
            raise MissingIdentityEmail()
        return email


class GoogleClient:
    def __init__(
        self,
        settings: Settings,
        transport: httpx.BaseTransport | None = None,
    ):
        self.settings = settings
        self.http = httpx.Client(
            timeout=settings.GOOGLE_HTTP_TIMEOUT,
            transport=transport,
        )
        self.oauth = OAuth2Client(
            client_id=settings.GOOGLE_CLIENT_ID,
            client_secret=settings.GOOGLE_CLIENT_SECRET,
            scope=" ".join(SCOPES),
            token_endpoint_auth_method="client_secret_post",
            timeout=settings.GOOGLE_HTTP_TIMEOUT,
            transport=transport,
        )

    def close(self) -> None:
        self.http.close()
        self.oauth.close()

    # ----- Authorization code flow -----

    def build_authorize_url(self, callback_url: str, state: str) -> str:
        """
        Build the consent-screen URL.

        `callback_url` must be byte-for-byte the same one later passed to
        `exchange_code`, otherwise Google rejects the exchange.
        """
        url, _ = self.oauth.create_authorization_url(
            AUTHORIZE_URL,
            state=state,
            redirect_uri=callback_url,
            access_type="offline",
            prompt="consent",
        )
        return url

    def exchange_code(self, code: str, callback_url: str) -> dict:
        """
        Exchange an authorization code for Google tokens.

        Raises:
            ProviderExchangeFailed: on transport errors, provider errors,
                unreadable responses or a response without an access_token.
        """
        try:
            tokens = self.oauth.fetch_token(
                TOKEN_URL,
                code=code,
                redirect_uri=callback_url,
            )
        except OAuthError as e:
            logger.error("Google token error: %s", e)
            raise ProviderExchangeFailed()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Google token exchange failed: %s", e)
            raise ProviderExchangeFailed()

        if not tokens.get("access_token"):
            logger.error("Google token response without access_token")
            raise ProviderExchangeFailed()
        return dict(tokens)

    # ----- Token verification -----

    def fetch_userinfo(self, access_token: str) -> GoogleIdentity:
        """
        Resolve an OAuth access token into a profile via the userinfo endpoint.

        Raises:
            ProviderVerificationFailed: if Google does not accept the token.
        """
        logger.info("Fetching Google user info (token length %d)", len(access_token))
        try:
            response = self.http.get(
                USERINFO_URL,
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.HTTPError as e:
            logger.error("Google userinfo request failed: %s", e)
            raise ProviderVerificationFailed()

        if not response.is_success:
            logger.error(
                "Google userinfo failed %s: %s", response.status_code, response.text
            )
            raise ProviderVerificationFailed()

        try:
            raw = _json_object(response)
        except ValueError:
            logger.error("Google userinfo returned a malformed body: %s", response.text)
            raise ProviderVerificationFailed()

        return GoogleIdentity(
            email=raw.get("email"),
            name=raw.get("name"),
            picture=raw.get("picture"),
            email_verified=raw.get("verified_email", False),
        )

    def verify_id_token(self, id_token: str) -> GoogleIdentity:
        """
        Verify an ID token (GSI credential or mobile idToken) with Google.

        When GOOGLE_ALLOWED_AUDIENCES is configured, tokens minted for
        other client ids are rejected too.

        Raises:
            ProviderVerificationFailed: with the provider's error text.
        """
        logger.info("Verifying Google ID token (length %d)", len(id_token))
        try:
            response = self.http.get(TOKENINFO_URL, params={"id_token": id_token})
        except httpx.HTTPError as e:
            logger.error("Google tokeninfo request failed: %s", e)
            raise ProviderVerificationFailed(f"Invalid Google ID token: {e}")

        if not response.is_success:
            logger.error(
                "Google token verification failed %s: %s",
                response.status_code,
                response.text,
            )
            raise ProviderVerificationFailed(
                f"Invalid Google ID token: {response.text}"
            )

        try:
            payload = _json_object(response)
        except ValueError:
            logger.error("Google tokeninfo returned a malformed body: %s", response.text)
            raise ProviderVerificationFailed(
                "Invalid Google ID token: malformed response"
            )

        allowed = self.settings.GOOGLE_ALLOWED_AUDIENCES
        if allowed and payload.get("aud") not in allowed:
            logger.warning("Google ID token audience rejected: %s", payload.get("aud"))
            raise ProviderVerificationFailed(
                "Invalid Google ID token: audience mismatch"
            )

        return GoogleIdentity(
            email=payload.get("email"),
            name=payload.get("name"),
            picture=payload.get("picture"),
            email_verified=payload.get("email_verified", False),
        )


def get_google_client():
    """
    FastAPI dependency yielding a GoogleClient bound to current settings.

    The underlying HTTP connection pool is closed after the request.
    """
    client = GoogleClient(get_settings())
    try:
        yield client
    finally:
        client.close()
