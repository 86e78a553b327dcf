from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session


def test_settings_defaults(client: TestClient, user: dict) -> None:
    assert client.get("/api/settings").json() == {
        "theme": "system",
        "task_spacing": "default",
        "property_visibility": {},
        "streak": 0,
        "last_completed_on": None,
    }


def test_update_appearance_partial(client: TestClient, user: dict) -> None:
    res = client.put("/api/settings/appearance", json={"theme": "dark"})
    assert res.status_code == 200
    assert res.json() == {"success": True, "user": {"theme": "dark", "task_spacing": "default"}}

    res = client.put("/api/settings/appearance", json={"task_spacing": "compact"})
    assert res.json()["user"] == {"theme": "dark", "task_spacing": "compact"}

    assert client.put("/api/settings/appearance", json={"theme": "neon"}).status_code == 400
    assert client.put("/api/settings/appearance", json={"task_spacing": "huge"}).status_code == 400


def test_update_visibility_replaces_map(client: TestClient, user: dict) -> None:
    res = client.put("/api/settings/visibility", json={"tags": False, "due": True})
    assert res.status_code == 200
    assert res.json() == {"success": True, "property_visibility": {"tags": False, "due": True}}

    client.put("/api/settings/visibility", json={"effort": False})
    assert client.get("/api/settings").json()["property_visibility"] == {"effort": False}

    assert client.put("/api/settings/visibility", json={"tags": "sometimes"}).status_code == 400
    assert client.put("/api/settings/visibility", json=["tags"]).status_code == 400


def test_default_properties_replace_whole_set_in_order(client: TestClient, user: dict) -> None:
    assert client.get("/api/settings/default-properties").json() == []

    res = client.put(
        "/api/settings/default-properties",
        json=[
            {"id": "tmp-1", "name": "priority", "type": "SELECT", "options": [{"id": "o1", "name": "high"}, {"id": "o2", "name": " "}]},
            {"id": "tmp-2", "name": "due", "type": "DATE", "options": [{"name": "ignored"}], "value": "2024-01-01"},
        ],
    )
    assert res.status_code == 200
    body = res.json()
    assert [(p["name"], p["type"], p["order"]) for p in body] == [("priority", "SELECT", 0), ("due", "DATE", 1)]
    assert body[0]["options"] == [{"id": "o1", "name": "high"}]
    assert body[1]["options"] == []

    res = client.put("/api/settings/default-properties", json=[{"name": "effort", "type": "NUMBER"}])
    assert [p["name"] for p in res.json()] == ["effort"]
    assert [p["name"] for p in client.get("/api/settings/default-properties").json()] == ["effort"]

    assert client.put("/api/settings/default-properties", json=[]).json() == []


def test_default_properties_failed_replace_keeps_old_set(
    client: TestClient, user: dict, monkeypatch: pytest.MonkeyPatch,
) -> None:
    client.put("/api/settings/default-properties", json=[{"name": "effort", "type": "NUMBER"}])

    def failing_commit(self):
        raise OperationalError("COMMIT", {}, Exception("database is locked"))

    monkeypatch.setattr(Session, "commit", failing_commit)
    res = client.put(
        "/api/settings/default-properties",
        json=[{"name": "due", "type": "DATE"}, {"name": "where", "type": "TEXT"}],
    )
    monkeypatch.undo()

    assert res.status_code == 500
    assert res.json() == {"detail": "Internal Server Error"}
    assert [p["name"] for p in client.get("/api/settings/default-properties").json()] == ["effort"]


def test_default_properties_validation(client: TestClient, user: dict) -> None:
    for payload in ([{"name": "", "type": "TEXT"}], [{"name": "x", "type": "COLOR"}], {"name": "x", "type": "TEXT"}):
        res = client.put("/api/settings/default-properties", json=payload)
        assert res.status_code == 400
        assert res.json()["error"] == "Invalid request body"


def test_property_catalogue(client: TestClient, user: dict) -> None:
    assert client.post("/api/properties", json={"name": "zeta", "type": "TEXT"}).status_code == 201
    created = client.post("/api/properties", json={"name": "alpha", "type": "MULTI_SELECT"}).json()
    assert created["type"] == "MULTI_SELECT"

    names = [p["name"] for p in client.get("/api/properties").json()]
    assert names == ["alpha", "zeta"]

    assert client.delete(f"/api/properties/{created['id']}").status_code == 204
    assert [p["name"] for p in client.get("/api/properties").json()] == ["zeta"]
    assert client.delete(f"/api/properties/{created['id']}").status_code == 404


def test_property_catalogue_validation(client: TestClient, user: dict) -> None:
    assert client.post("/api/properties", json={"name": "", "type": "TEXT"}).status_code == 400
    assert client.post("/api/properties", json={"name": "x" * 51, "type": "TEXT"}).status_code == 400
    assert client.post("/api/properties", json={"name": "ok", "type": "VIDEO"}).status_code == 400
