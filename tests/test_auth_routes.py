from __future__ import annotations

import time

import jwt
from fastapi.testclient import TestClient
from loguru import logger

from taskboard.config import settings


def _forge_token(secret: str, **overrides: object) -> str:
    now = int(time.time())
    payload: dict[str, object] = {
        "sub": overrides.get("sub", "spoof"),
        "user_id": overrides.get("user_id", 1),
        "iss": settings.jwt_iss,
        "iat": now,
        "exp": overrides.get("exp", now + 3600),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def test_token_carries_user_id(client: TestClient) -> None:
    registered = client.post("/auth/register", json={"username": "ada", "password": "s3cret"})
    assert registered.status_code == 201, registered.text
    user_id = registered.json()["user"]["id"]

    response = client.post("/auth/token", json={"username": "ada", "password": "s3cret"})
    assert response.status_code == 200, response.text
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["expires_in"] == settings.jwt_ttl_seconds

    claims = jwt.decode(data["access_token"], settings.jwt_secret, algorithms=["HS256"])
    assert claims["user_id"] == user_id
    assert claims["sub"] == "ada"


def test_duplicate_username_is_conflict(client: TestClient) -> None:
    assert client.post("/auth/register", json={"username": "bob", "password": "x"}).status_code == 201

    response = client.post("/auth/register", json={"username": "bob", "password": "y"})
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "conflict"


def test_wrong_password_rejected(client: TestClient) -> None:
    client.post("/auth/register", json={"username": "cy", "password": "right"})

    response = client.post("/auth/token", json={"username": "cy", "password": "wrong"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"

    unknown = client.post("/auth/token", json={"username": "nobody", "password": "right"})
    assert unknown.status_code == 401


def test_authorization_header_required(client: TestClient) -> None:
    response = client.get("/projects/leader")
    assert response.status_code == 401
    assert response.json()["detail"] == "Missing bearer token"


def test_token_signed_with_other_secret_rejected(client: TestClient) -> None:
    headers = {"Authorization": f"Bearer {_forge_token('not-the-secret')}"}
    response = client.get("/projects/leader", headers=headers)
    assert response.status_code == 401


def test_expired_token_rejected(client: TestClient) -> None:
    token = _forge_token(settings.jwt_secret, exp=int(time.time()) - 60)
    response = client.get("/projects/leader", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_token_without_user_id_rejected(client: TestClient) -> None:
    token = jwt.encode({"sub": "ghost", "exp": int(time.time()) + 60}, settings.jwt_secret, algorithm="HS256")
    response = client.get("/projects/leader", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "unauthorized"


def test_users_me(client: TestClient, make_user) -> None:
    user_id, headers = make_user("dana")

    response = client.get("/users/me", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"user": {"id": user_id, "username": "dana"}}


def test_healthcheck_and_request_id(client: TestClient) -> None:
    response = client.get("/", headers={"X-Request-Id": "req-123"})
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert response.headers["X-Request-Id"] == "req-123"


def test_access_log_names_authenticated_user(client: TestClient, make_user) -> None:
    user_id, headers = make_user("erin")
    records: list[dict] = []
    sink_id = logger.add(lambda message: records.append(message.record), level="INFO")
    try:
        client.get("/users/me", headers={**headers, "X-Request-Id": "req-me"})
        client.get("/", headers={"X-Request-Id": "req-health"})
    finally:
        logger.remove(sink_id)

    access = {r["extra"]["req"]: r["extra"] for r in records if r["message"].startswith("access ")}
    assert access["req-me"]["user"] == str(user_id)
    assert access["req-me"]["route"] == "/users/me"
    assert access["req-health"]["user"] == "anonymous"
