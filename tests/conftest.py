"""Shared fixtures: an app on in-memory SQLite, its client and an authenticated user."""
import pytest

from health_dashboard import create_app
from health_dashboard.config import TestingConfig
from health_dashboard.extensions import ai_client, db


class FailingBackend:
    name = "failing"

    def generate(self, prompt, task="chat", structured=False):
        raise RuntimeError("backend unavailable")

    def close(self):
        pass


@pytest.fixture
def app(tmp_path):
    app = create_app(TestingConfig)
    app.config["REPORT_TEMP_DIR"] = str(tmp_path / "reports")
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def registered_user(client):
    """Register a user and return the JSON body of the response (token + user)."""
    response = client.post("/api/auth/register", json={
        "name": "Test User",
        "email": "test.user@healthdash.io",
        "password": "secret123",
    })
    assert response.status_code == 201
    return response.get_json()


@pytest.fixture
def auth_headers(registered_user):
    return {"Authorization": f"Bearer {registered_user['token']}"}


@pytest.fixture
def user_headers():
    """Identify the caller by header only, as the demo frontend does."""
    return {"x-user-id": "42"}


@pytest.fixture
def failing_ai(app, monkeypatch):
    monkeypatch.setattr(ai_client, "backend", FailingBackend())
    monkeypatch.setattr(ai_client, "initialized", True)
    return ai_client
