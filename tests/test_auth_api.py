from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from taskboard.config import Settings
from taskboard.main import create_app


def test_login_creates_user_with_starter_tasks(client: TestClient, user: dict) -> None:
    assert user["email"] == "ada@taskboard.dev"
    assert user["name"] == "Ada"
    assert user["streak"] == 0

    tasks = client.get("/api/tasks").json()
    assert sorted((t["title"], t["duration"]) for t in tasks["active"]) == [
        ("go for a 15-minute walk", 15),
        ("plan the week ahead", 30),
        ("review project requirements", 45),
    ]
    assert tasks["completed"] == []


def test_second_login_does_not_reseed(client: TestClient, user: dict) -> None:
    res = client.post("/auth/login", json={"email": "ADA@taskboard.dev"})
    assert res.status_code == 200
    assert res.json()["id"] == user["id"]
    assert res.json()["name"] == "Ada"
    assert len(client.get("/api/tasks").json()["active"]) == 3


def test_me_and_logout(client: TestClient, user: dict) -> None:
    assert client.get("/auth/me").json()["id"] == user["id"]

    assert client.post("/auth/logout").status_code == 204
    assert client.get("/auth/me").status_code == 401


@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/api/tasks"),
        ("post", "/api/tasks"),
        ("get", "/api/properties"),
        ("get", "/api/settings"),
        ("put", "/api/settings/appearance"),
        ("post", "/api/ai/recommend"),
        ("get", "/api/board"),
    ],
)
def test_api_requires_session(client: TestClient, method: str, path: str) -> None:
    kwargs = {} if method == "get" else {"json": {}}
    res = getattr(client, method)(path, **kwargs)
    assert res.status_code == 401
    assert res.json() == {"detail": "unauthorized"}


def test_invalid_email_rejected(client: TestClient) -> None:
    res = client.post("/auth/login", json={"email": "not-an-email"})
    assert res.status_code == 400
    assert res.json()["error"] == "Invalid request body"


def test_dev_login_can_be_disabled(settings: Settings) -> None:
    locked = Settings(database_url=settings.database_url, secret_key="x", dev_login=False)
    with TestClient(create_app(locked)) as c:
        assert c.post("/auth/login", json={"email": "ada@taskboard.dev"}).status_code == 404


def test_users_cannot_see_each_others_tasks(app, client: TestClient, user: dict) -> None:
    mine = client.post("/api/tasks", json={"title": "secret plan", "duration": 10}).json()

    with TestClient(app) as other:
        other.post("/auth/login", json={"email": "grace@taskboard.dev"})
        assert other.get(f"/api/tasks/{mine['id']}").status_code == 404
        assert other.patch(f"/api/tasks/{mine['id']}", json={"completed": True}).status_code == 404
        assert other.delete(f"/api/tasks/{mine['id']}").status_code == 404
        titles = [t["title"] for t in other.get("/api/tasks").json()["active"]]
        assert "secret plan" not in titles
