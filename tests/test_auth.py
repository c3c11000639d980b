import base64
from datetime import datetime, timedelta
from urllib.parse import parse_qs, urlparse

import jwt
import pytest

from quintave.api.v1.routes import google_auth as google_auth_routes
from quintave.core.config import settings
from quintave.core.google_auth import PLATFORM_NATIVE, PLATFORM_WEB, decode_state, encode_state


async def test_me_requires_a_session(client):
    response = await client.get("/api/v1/auth/me")

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


async def test_me_with_bearer_token(client, user, auth_headers):
    response = await client.get("/api/v1/auth/me", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == str(user.id)
    assert body["email"] == "saver@example.com"
    assert body["has_completed_onboarding"] is False


async def test_me_with_session_cookie(client, user, auth_headers):
    token = auth_headers["Authorization"].split(" ", 1)[1]
    response = await client.get("/api/v1/auth/me", headers={"Cookie": f"{settings.SESSION_COOKIE_NAME}={token}"})

    assert response.status_code == 200
    assert response.json()["id"] == str(user.id)


async def test_rejects_tampered_and_expired_tokens(client, user):
    assert (await client.get("/api/v1/auth/me", headers={"Authorization": "Bearer garbage"})).status_code == 401

    expired = jwt.encode(
        {"sub": str(user.id), "aud": ["fastapi-users:auth"], "exp": datetime.utcnow() - timedelta(minutes=1)},
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )
    response = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {expired}"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Token has expired"


async def test_logout_clears_cookie(client):
    response = await client.post("/api/v1/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert settings.SESSION_COOKIE_NAME in response.headers.get("set-cookie", "")


def test_state_round_trip():
    state = encode_state("https://app.example.com/api/oauth/callback", PLATFORM_NATIVE)
    assert decode_state(state) == ("https://app.example.com/api/oauth/callback", PLATFORM_NATIVE)


def test_legacy_state_is_a_bare_uri():
    state = base64.b64encode(b"https://app.example.com/api/oauth/callback").decode("ascii")
    assert decode_state(state) == ("https://app.example.com/api/oauth/callback", PLATFORM_WEB)


def test_malformed_state_raises():
    with pytest.raises(ValueError):
        decode_state("abc")


async def test_google_login_without_client_id(client, monkeypatch):
    monkeypatch.setattr(settings, "GOOGLE_CLIENT_ID", "")

    response = await client.get("/api/oauth/google")

    assert response.status_code == 500


async def test_google_login_redirects_to_google(client, monkeypatch):
    monkeypatch.setattr(settings, "GOOGLE_CLIENT_ID", "client-123.apps.googleusercontent.com")
    monkeypatch.setattr(settings, "GOOGLE_CLIENT_SECRET", "shh")

    response = await client.get("/api/oauth/google", params={"platform": "native"})

    assert response.status_code == 307
    location = urlparse(response.headers["location"])
    assert location.netloc == "accounts.google.com"
    query = parse_qs(location.query)
    assert query["client_id"] == ["client-123.apps.googleusercontent.com"]
    assert query["prompt"] == ["select_account"]
    _, platform = decode_state(query["state"][0])
    assert platform == PLATFORM_NATIVE


async def test_callback_requires_code_and_state(client):
    assert (await client.get("/api/oauth/callback", params={"code": "abc"})).status_code == 400
    assert (await client.get("/api/oauth/callback", params={"state": "abc"})).status_code == 400


def fake_exchange(user_info):
    async def exchange(code, redirect_uri):
        return "google-access-token", user_info
    return exchange


async def test_callback_signs_in_web_user(client, monkeypatch):
    monkeypatch.setattr(
        google_auth_routes,
        "exchange_code_for_token",
        fake_exchange({"sub": "google-999", "email": "new@example.com", "name": "New Person"}),
    )
    state = encode_state("http://test/api/oauth/callback", PLATFORM_WEB)

    response = await client.get("/api/oauth/callback", params={"code": "auth-code", "state": state})

    assert response.status_code == 302
    assert response.headers["location"] == "/"
    token = response.cookies.get(settings.SESSION_COOKIE_NAME)
    assert token

    me = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.json()["email"] == "new@example.com"
    assert me.json()["login_method"] == "google"


async def test_callback_native_returns_deep_link(client, monkeypatch):
    monkeypatch.setattr(
        google_auth_routes,
        "exchange_code_for_token",
        fake_exchange({"sub": "google-native", "email": "phone@example.com"}),
    )
    state = encode_state("http://test/api/oauth/callback", PLATFORM_NATIVE)

    response = await client.get("/api/oauth/callback", params={"code": "auth-code", "state": state})

    assert response.status_code == 302
    assert response.headers["location"] == settings.NATIVE_OAUTH_REDIRECT


async def test_callback_without_google_subject(client, monkeypatch):
    monkeypatch.setattr(google_auth_routes, "exchange_code_for_token", fake_exchange({"email": "x@example.com"}))
    state = encode_state("http://test/api/oauth/callback", PLATFORM_WEB)

    response = await client.get("/api/oauth/callback", params={"code": "auth-code", "state": state})

    assert response.status_code == 400


async def test_callback_exchange_failure(client, monkeypatch):
    async def failing_exchange(code, redirect_uri):
        raise ValueError("HTTP error during token exchange")

    monkeypatch.setattr(google_auth_routes, "exchange_code_for_token", failing_exchange)
    state = encode_state("http://test/api/oauth/callback", PLATFORM_WEB)

    response = await client.get("/api/oauth/callback", params={"code": "auth-code", "state": state})

    assert response.status_code == 500
    assert response.json()["detail"] == "OAuth callback failed"
