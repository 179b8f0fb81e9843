from app.core.config import Settings, get_settings
from app.core.cors import ALLOW_HEADERS, ALLOW_METHODS, cors_headers


def _settings(**overrides) -> Settings:
    return get_settings().model_copy(update=overrides)


def test_development_echoes_origin():
    headers = cors_headers("http://localhost:5173", _settings(ENVIRONMENT="development"))

    assert headers["Access-Control-Allow-Origin"] == "http://localhost:5173"
    assert headers["Access-Control-Allow-Credentials"] == "true"
    assert headers["Access-Control-Allow-Methods"] == ALLOW_METHODS
    assert headers["Access-Control-Allow-Headers"] == ALLOW_HEADERS


def test_development_without_origin_is_wildcard():
    headers = cors_headers(None, _settings(ENVIRONMENT="development"))
    assert headers["Access-Control-Allow-Origin"] == "*"


def test_production_allow_listed_origin():
    settings = _settings(ENVIRONMENT="production", CORS_ALLOWED_ORIGINS=["https://admin.easyfin.app"])

    headers = cors_headers("https://admin.easyfin.app", settings)

    assert headers["Access-Control-Allow-Origin"] == "https://admin.easyfin.app"
    assert headers["Access-Control-Allow-Credentials"] == "true"


def test_production_without_origin_disables_credentials():
    headers = cors_headers(None, _settings(ENVIRONMENT="production"))

    assert headers["Access-Control-Allow-Origin"] == "*"
    assert headers["Access-Control-Allow-Credentials"] == "false"


def test_production_unknown_origin_gets_no_allow_origin():
    headers = cors_headers("https://evil.example.com", _settings(ENVIRONMENT="production"))
    assert "Access-Control-Allow-Origin" not in headers


def test_preflight_on_api_path(client):
    resp = client.options(
        "/api/auth/google",
        headers={"Origin": "http://localhost:3001", "Access-Control-Request-Method": "POST"},
    )

    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "http://localhost:3001"
    assert resp.headers["access-control-allow-methods"] == ALLOW_METHODS


def test_api_responses_carry_cors_headers(client):
    resp = client.get("/api/auth/me", headers={"Origin": "http://localhost:3001"})

    assert resp.status_code == 401
    assert resp.headers["access-control-allow-origin"] == "http://localhost:3001"


def test_non_api_paths_are_untouched(client):
    resp = client.get("/", headers={"Origin": "http://localhost:3001"})

    assert resp.status_code == 200
    assert "access-control-allow-origin" not in resp.headers
