import os

# Settings are read once at import time, so configure before importing app.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "development"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["GOOGLE_CLIENT_ID"] = "test-client-id"
os.environ["GOOGLE_CLIENT_SECRET"] = "test-client-secret"
os.environ.pop("PUBLIC_BASE_URL", None)

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, select

from app.core.auth import create_access_token
from app.core.config import get_settings
from app.core.google_client import GoogleClient, get_google_client
from app.core.security import hash_password
from app.database import engine
from app.main import app
from app.models.user import User

GOOGLE_PROFILE = {
    "email": "new.user@gmail.com",
    "name": "New User",
    "picture": "https://lh3.googleusercontent.com/a/new-user",
}


class GoogleStub:
    """
    Fake Google endpoints served through httpx.MockTransport.

    Each endpoint answers with a configurable (status, body) pair, where a
    dict body is sent as JSON and a str body as plain text;
    every request is recorded in `requests`.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.token = (200, {"access_token": "google-access-token", "expires_in": 3599})
        self.userinfo = (200, {**GOOGLE_PROFILE, "verified_email": True})
        self.tokeninfo = (
            200,
            {**GOOGLE_PROFILE, "email_verified": "true", "aud": "test-client-id"},
        )
        self.network_error = False

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.network_error:
            raise httpx.ConnectError("connection refused", request=request)

        path = request.url.path
        if path == "/token":
            status_code, body = self.token
        elif path == "/tokeninfo":
            status_code, body = self.tokeninfo
        elif path == "/oauth2/v2/userinfo":
            status_code, body = self.userinfo
        else:
            return httpx.Response(404, json={"error": "not_found"})
        if isinstance(body, str):
            return httpx.Response(status_code, text=body)
        return httpx.Response(status_code, json=body)

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]


@pytest.fixture(autouse=True)
def reset_db():
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    yield


@pytest.fixture
def google():
    return GoogleStub()


@pytest.fixture
def client(google):
    def override_google_client():
        client = GoogleClient(get_settings(), transport=httpx.MockTransport(google.handler))
        try:
            yield client
        finally:
            client.close()

    app.dependency_overrides[get_google_client] = override_google_client
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user():
    def _make(
        email: str = "existing@example.com",
        password: str | None = None,
        **fields,
    ) -> User:
        fields.setdefault("name", email.split("@")[0])
        user = User(
            email=email,
            password_hash=hash_password(password) if password else "",
            **fields,
        )
        with Session(engine) as session:
            session.add(user)
            session.commit()
            session.refresh(user)
        return user

    return _make


@pytest.fixture
def auth_headers():
    def _headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user)}"}

    return _headers


def _rows(model, **filters) -> list:
    """Read rows with a fresh session so results never come from a stale identity map."""
    with Session(engine) as session:
        return session.exec(select(model).filter_by(**filters)).all()


@pytest.fixture
def rows():
    return _rows
