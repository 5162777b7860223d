from datetime import timedelta

from fastapi.testclient import TestClient
from sqlalchemy import update

from conftest import API, PASSWORD, bearer, execute, register
from fittrack.core.timeutils import utcnow
from fittrack.models import AuthToken, User


def test_register_returns_token_and_defaults(client: TestClient):
    body = register(client, email="New.User@Example.com", name="  Sam ")
    assert body["token_type"] == "bearer"
    user = body["user"]
    assert user["email"] == "new.user@example.com"
    assert user["display_name"] == "Sam"
    assert user["fitness_level"] == "beginner"
    assert user["notifications_enabled"] is True
    assert user["unit_system"] == "metric"

    r = client.get(f"{API}/users/me", headers=bearer(body["access_token"]))
    assert r.status_code == 200
    assert r.json()["id"] == user["id"]


def test_register_duplicate_email(client: TestClient):
    register(client)
    r = client.post(
        f"{API}/auth/register",
        json={
            "email": "ATHLETE@example.com",
            "password": PASSWORD,
            "confirm_password": PASSWORD,
            "display_name": "Other",
        },
    )
    assert r.status_code == 409
    assert r.json()["detail"] == "An account already exists for this email."


def test_register_validation(client: TestClient):
    base = {"email": "v@example.com", "password": PASSWORD, "confirm_password": PASSWORD, "display_name": "V"}
    for override in (
        {"password": "12345", "confirm_password": "12345"},
        {"confirm_password": "different"},
        {"display_name": "   "},
        {"email": "not-an-email"},
    ):
        r = client.post(f"{API}/auth/register", json={**base, **override})
        assert r.status_code == 422, override


def test_login_and_logout(client: TestClient):
    register(client)
    r = client.post(f"{API}/auth/login", json={"email": "athlete@example.com", "password": PASSWORD})
    assert r.status_code == 200, r.text
    token = r.json()["access_token"]
    assert r.json()["user"]["last_active_at"] is not None

    assert client.post(f"{API}/auth/logout", headers=bearer(token)).status_code == 204
    assert client.get(f"{API}/users/me", headers=bearer(token)).status_code == 401


def test_login_failures(client: TestClient):
    register(client)
    for payload in (
        {"email": "athlete@example.com", "password": "wrong-password"},
        {"email": "nobody@example.com", "password": PASSWORD},
    ):
        r = client.post(f"{API}/auth/login", json=payload)
        assert r.status_code == 401
        assert r.json()["detail"] == "Invalid email or password."


def test_protected_routes_need_token(client: TestClient):
    assert client.get(f"{API}/users/me").status_code == 401
    assert client.get(f"{API}/plans", headers=bearer("garbage")).status_code == 401


def test_password_reset_flow(client: TestClient, monkeypatch):
    old_token = register(client)["access_token"]
    sent = {}

    def fake_deliver(email, token):
        sent[email] = token

    monkeypatch.setattr("fittrack.services.accounts.deliver_password_reset", fake_deliver)

    r = client.post(f"{API}/auth/password-reset", json={"email": "athlete@example.com"})
    assert r.status_code == 202
    unknown = client.post(f"{API}/auth/password-reset", json={"email": "ghost@example.com"})
    assert unknown.status_code == 202
    assert unknown.json() == r.json()
    assert list(sent) == ["athlete@example.com"]

    reset_token = sent["athlete@example.com"]
    r = client.post(
        f"{API}/auth/password-reset/confirm",
        json={"token": reset_token, "new_password": "brandnew1", "confirm_password": "brandnew1"},
    )
    assert r.status_code == 204, r.text

    # single use, old sessions signed out, new password works
    again = client.post(
        f"{API}/auth/password-reset/confirm",
        json={"token": reset_token, "new_password": "another1", "confirm_password": "another1"},
    )
    assert again.status_code == 400
    assert client.get(f"{API}/users/me", headers=bearer(old_token)).status_code == 401
    r = client.post(f"{API}/auth/login", json={"email": "athlete@example.com", "password": "brandnew1"})
    assert r.status_code == 200


def test_password_reset_with_bad_token(client: TestClient):
    r = client.post(
        f"{API}/auth/password-reset/confirm",
        json={"token": "nope", "new_password": "brandnew1", "confirm_password": "brandnew1"},
    )
    assert r.status_code == 400


def test_expired_access_token_is_rejected(client: TestClient):
    token = register(client)["access_token"]
    execute(client, update(AuthToken).values(expires_at=utcnow() - timedelta(minutes=1)))
    r = client.get(f"{API}/users/me", headers=bearer(token))
    assert r.status_code == 401
    assert r.headers["WWW-Authenticate"] == "Bearer"


def test_disabled_account(client: TestClient):
    token = register(client)["access_token"]
    execute(client, update(User).where(User.email == "athlete@example.com").values(is_active=False))

    assert client.get(f"{API}/users/me", headers=bearer(token)).status_code == 401
    r = client.post(f"{API}/auth/login", json={"email": "athlete@example.com", "password": PASSWORD})
    assert r.status_code == 403
