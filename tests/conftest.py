# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from taskboard.config import Settings
from taskboard.deps import get_recommender
from taskboard.main import create_app

from .fakes import FakeRecommender


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Explicit settings so tests never read the developer's environment."""
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'taskboard.sqlite3'}",
        secret_key="test-secret",
        ai_api_key=None,
        ai_rate_limit=3,
        ai_rate_window_seconds=60.0,
    )


@pytest.fixture()
def recommender() -> FakeRecommender:
    return FakeRecommender()


@pytest.fixture()
def app(settings: Settings, recommender: FakeRecommender):
    app = create_app(settings)
    app.dependency_overrides[get_recommender] = lambda: recommender
    return app


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def user(client: TestClient) -> dict:
    """Signs the client in; the new account comes with three starter tasks."""
    res = client.post("/auth/login", json={"email": "ada@taskboard.dev", "name": "Ada"})
    assert res.status_code == 200
    return res.json()


@pytest.fixture()
def db(app):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()
