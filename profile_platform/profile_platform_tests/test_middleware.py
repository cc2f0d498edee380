"""
Tests for the `protect` dependency as seen over HTTP.
"""
import logging

import pytest
from fastapi import Depends, Request
from fastapi.testclient import TestClient

from profile_platform.profile_platform.profile_service.auth import create_access_token
from profile_platform.profile_platform.profile_service.config import Settings
from profile_platform.profile_platform.profile_service.main import create_app
from profile_platform.profile_platform.profile_service.middleware import protect
from profile_platform.profile_platform.profile_service.schemas import Identity

SECRET = "middleware-test-secret-0123456789ab"


def build_client(secret=SECRET):
    app = create_app(Settings(JWT_SECRET=secret))

    @app.get("/echo-state")
    def echo_state(request: Request, identity: Identity = Depends(protect)):
        return {"state_user": request.state.user, "identity": identity.id}

    return TestClient(app)


@pytest.fixture
def client():
    return build_client()


def test_missing_header_returns_401_no_token(client):
    r = client.get("/api/users/profile")
    assert r.status_code == 401
    assert r.json() == {"message": "Unauthorized, no token"}
    assert r.headers["www-authenticate"] == "Bearer"


def test_basic_scheme_returns_401_no_token(client):
    r = client.get("/api/users/profile", headers={"Authorization": "Basic xyz"})
    assert r.status_code == 401
    assert r.json() == {"message": "Unauthorized, no token"}


def test_valid_token_is_admitted(client):
    token = create_access_token("42", SECRET)
    r = client.get("/api/users/profile", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 200
    assert r.json() == {"message": "This is a protected route", "user": "42"}


def test_identity_is_attached_to_request_state(client):
    token = create_access_token("u123", SECRET)
    r = client.get("/echo-state", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 200
    assert r.json() == {"state_user": "u123", "identity": "u123"}


def test_rejected_request_never_reaches_handler(client):
    r = client.get("/echo-state", headers={"Authorization": "Bearer garbage"})
    assert r.status_code == 401
    assert "state_user" not in r.json()


def test_wrong_secret_returns_401_invalid(client):
    token = create_access_token("42", "some-other-secret-0123456789abcdef")
    r = client.get("/api/users/profile", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
    assert r.json() == {"message": "Invalid or expired token"}


def test_expired_token_returns_401_invalid(client):
    token = create_access_token("42", SECRET, expires_minutes=-5)
    r = client.get("/api/users/profile", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
    assert r.json() == {"message": "Invalid or expired token"}


def test_apps_with_distinct_secrets_are_isolated():
    first = build_client("first-secret-0123456789abcdefghijkl")
    second = build_client("second-secret-0123456789abcdefghijk")
    token = create_access_token("42", "first-secret-0123456789abcdefghijkl")
    headers = {"Authorization": f"Bearer {token}"}

    assert first.get("/api/users/profile", headers=headers).status_code == 200
    assert second.get("/api/users/profile", headers=headers).status_code == 401


def test_rejection_is_logged_without_token(client, caplog):
    token = create_access_token("42", "some-other-secret-0123456789abcdef")
    with caplog.at_level(logging.WARNING):
        client.get("/api/users/profile", headers={"Authorization": f"Bearer {token}"})

    messages = [rec.getMessage() for rec in caplog.records]
    assert any("Invalid or expired token" in m for m in messages)
    assert not any(token in m for m in messages)
    assert not any(SECRET in m for m in messages)
