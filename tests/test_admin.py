import uuid

from create_admin import create_admin
from app.core.security import verify_password
from app.models.account import Account
from app.models.user import User


def test_user_listing_requires_admin(client, make_user, auth_headers):
    user = make_user(email="plain@example.com")

    assert client.get("/api/users").status_code == 401
    assert client.get("/api/users", headers=auth_headers(user)).status_code == 403


def test_admin_lists_and_reads_users(client, make_user, auth_headers):
    admin = make_user(email="admin@example.com", role="admin")
    other = make_user(email="other@example.com")

    resp = client.get("/api/users", headers=auth_headers(admin))
    assert resp.status_code == 200
    assert {u["email"] for u in resp.json()} == {"admin@example.com", "other@example.com"}
    assert all("password_hash" not in u for u in resp.json())

    resp = client.get(f"/api/users/{other.id}", headers=auth_headers(admin))
    assert resp.json()["email"] == "other@example.com"

    resp = client.get(f"/api/users/{uuid.uuid4()}", headers=auth_headers(admin))
    assert resp.status_code == 404


def test_locked_user_cannot_log_in_with_google(client, make_user, auth_headers, rows):
    admin = make_user(email="admin@example.com", role="admin")
    target = make_user(email="new.user@gmail.com")

    resp = client.patch(
        f"/api/users/{target.id}/status",
        json={"is_active": False},
        headers=auth_headers(admin),
    )
    assert resp.status_code == 200
    assert resp.json()["is_active"] is False

    resp = client.post("/api/auth/google", json={"accessToken": "a"})
    assert resp.status_code == 403
    assert rows(User, email="new.user@gmail.com")[0].is_active is False


def test_admin_cannot_lock_or_demote_self(client, make_user, auth_headers):
    admin = make_user(email="admin@example.com", role="admin")

    resp = client.patch(
        f"/api/users/{admin.id}/status",
        json={"is_active": False},
        headers=auth_headers(admin),
    )
    assert resp.status_code == 400

    resp = client.patch(
        f"/api/users/{admin.id}/role",
        json={"role": "user"},
        headers=auth_headers(admin),
    )
    assert resp.status_code == 400


def test_admin_promotes_user(client, make_user, auth_headers):
    admin = make_user(email="admin@example.com", role="admin")
    target = make_user(email="target@example.com")

    resp = client.patch(
        f"/api/users/{target.id}/role",
        json={"role": "admin"},
        headers=auth_headers(admin),
    )

    assert resp.status_code == 200
    assert resp.json()["role"] == "admin"


def test_role_must_be_known(client, make_user, auth_headers):
    admin = make_user(email="admin@example.com", role="admin")
    target = make_user(email="target@example.com")

    resp = client.patch(
        f"/api/users/{target.id}/role",
        json={"role": "superuser"},
        headers=auth_headers(admin),
    )
    assert resp.status_code == 422


# -------- accounts & notifications --------


def _google_login(client) -> dict[str, str]:
    token = client.post("/api/auth/google", json={"accessToken": "a"}).json()["data"]["accessToken"]
    return {"Authorization": f"Bearer {token}"}


def test_new_user_sees_default_account(client):
    headers = _google_login(client)

    resp = client.get("/api/accounts/me", headers=headers)

    assert resp.status_code == 200
    [account] = resp.json()
    assert account["name"] == "Cash wallet"
    assert account["type"] == "CASH"
    assert account["balance"] == 0
    assert account["icon"] == "💵"
    assert account["color"] == "#4CAF50"


def test_admin_filters_accounts_by_owner(client, make_user, auth_headers, rows):
    _google_login(client)
    admin = make_user(email="admin@example.com", role="admin")
    [owner] = rows(User, email="new.user@gmail.com")

    resp = client.get(
        "/api/accounts",
        params={"user_id": str(owner.id)},
        headers=auth_headers(admin),
    )

    assert resp.status_code == 200
    assert [a["user_id"] for a in resp.json()] == [str(owner.id)]
    assert len(rows(Account)) == 1


def test_welcome_notification_can_be_marked_read(client):
    headers = _google_login(client)

    [notification] = client.get("/api/notifications/me", headers=headers).json()
    assert notification["title"].startswith("Welcome to EasyFin")
    assert notification["is_read"] is False

    resp = client.patch(f"/api/notifications/{notification['id']}/read", headers=headers)

    assert resp.status_code == 200
    assert resp.json()["is_read"] is True


def test_cannot_mark_someone_elses_notification(client, make_user, auth_headers):
    _google_login(client)
    admin = make_user(email="admin@example.com", role="admin")
    stranger = make_user(email="stranger@example.com")

    [notification] = client.get("/api/notifications", headers=auth_headers(admin)).json()

    resp = client.patch(
        f"/api/notifications/{notification['id']}/read",
        headers=auth_headers(stranger),
    )
    assert resp.status_code == 404


# -------- create_admin script --------


def test_create_admin_creates_then_promotes(make_user, rows):
    assert create_admin("boss@example.com", "sup3rsecret") == "Admin boss@example.com created"
    [boss] = rows(User, email="boss@example.com")
    assert boss.role == "admin"
    assert verify_password("sup3rsecret", boss.password_hash)
    assert len(rows(Account, user_id=boss.id)) == 1

    make_user(email="someone@example.com", is_active=False)
    assert create_admin("someone@example.com", "ignored") == "Admin someone@example.com promoted"
    [someone] = rows(User, email="someone@example.com")
    assert someone.role == "admin"
    assert someone.is_active is True
