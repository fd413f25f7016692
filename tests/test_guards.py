from datetime import datetime, timedelta

import pytest
from jose import jwt

from knotty.core.config import settings
from knotty.core.security import create_temp_token

PROFILE = "/api/v1/users/profile"
SESSION = "/api/v1/users/session"
USER_ID = "6f1c2b9e-2f7a-4c1e-9d5b-0a4e8f3c7d21"


def _signed(**claims) -> str:
    claims.setdefault("exp", datetime.utcnow() + timedelta(minutes=5))
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def _cookie(token: str) -> dict:
    return {"Cookie": f"token={token}"}


def test_missing_token_is_unauthorized(client):
    response = client.get(PROFILE)

    assert response.status_code == 401
    assert response.json()["detail"] == "Access denied. No token provided."


@pytest.mark.parametrize("token", [
    "garbage",
    _signed(userId=USER_ID, role="customer", mfaVerified=False, exp=datetime.utcnow() - timedelta(minutes=1)),
    _signed(userId=USER_ID, role="superuser", mfaVerified=False),
    _signed(userId=USER_ID, mfaVerified=False),
    create_temp_token(USER_ID, "buyer@example.com"),
], ids=["garbage", "expired", "unknown-role", "no-role", "temporary"])
def test_unverifiable_token_is_forbidden(client, token):
    response = client.get(PROFILE, headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 403
    assert response.json()["detail"] == "Invalid token"


def test_token_from_another_secret_is_forbidden(client):
    token = jwt.encode({"userId": USER_ID, "role": "admin", "mfaVerified": True}, "other", algorithm="HS256")

    response = client.get(PROFILE, headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 403


def test_customer_cannot_reach_admin_routes(api, customer_token):
    response = api.client.get("/api/v1/users", headers=api.auth(customer_token))

    assert response.status_code == 403
    assert response.json()["detail"] == "Access denied. Insufficient permissions."


def test_admin_cannot_reach_customer_only_routes(api, admin_token):
    response = api.client.get("/api/v1/users/wishlist", headers=api.auth(admin_token))

    assert response.status_code == 403


def test_both_roles_reach_shared_routes(api, admin_token, customer_token):
    assert api.client.get(PROFILE, headers=api.auth(admin_token)).status_code == 200
    assert api.client.get(PROFILE, headers=api.auth(customer_token)).status_code == 200


def test_cookie_session_returns_claims(api, customer_token):
    response = api.client.get(SESSION, headers=_cookie(customer_token))

    assert response.status_code == 200
    body = response.json()
    assert body["userId"] == api.user_id(customer_token)
    assert body["role"] == "customer"
    assert body["mfaVerified"] is False


def test_cookie_route_ignores_bearer_header(api, customer_token):
    response = api.client.get(SESSION, headers=api.auth(customer_token))

    assert response.status_code == 401


def test_cookie_route_rejects_temporary_token(client):
    response = client.get(SESSION, headers=_cookie(create_temp_token(USER_ID, "buyer@example.com")))

    assert response.status_code == 403


def test_logout_clears_cookie(api, customer_token):
    response = api.client.post("/api/v1/users/logout", headers=_cookie(customer_token))

    assert response.status_code == 200
    assert response.json()["message"] == "Logged out successfully"
    cookie = response.headers["set-cookie"].lower()
    assert cookie.startswith('token=""') or cookie.startswith("token=;")
    assert "max-age=0" in cookie


def test_logout_requires_cookie(client):
    assert client.post("/api/v1/users/logout").status_code == 401


def test_request_id_is_echoed(client):
    response = client.get("/api/v1/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


def test_request_id_is_generated_when_missing(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.headers["X-Request-ID"]


def test_root_reports_version(client):
    response = client.get("/")

    assert response.json()["version"] == settings.VERSION
