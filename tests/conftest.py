import pytest
from fastapi.testclient import TestClient

from event_booking_api.app.core.config import Settings
from event_booking_api.app.main import create_app

ALLOWED_ORIGIN = "https://indatwaevents.com"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=str(tmp_path / "test.db"),
        db_pool_size=2,
        bcrypt_rounds=4,
        allowed_origins=f"{ALLOWED_ORIGIN},https://www.indatwaevents.com",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # The context manager runs the lifespan, which opens the database.
    with TestClient(app) as c:
        yield c


@pytest.fixture
def create_user(client):
    def _create(username="alice", password="Secret1!", role="staff"):
        resp = client.post("/api/users", json={"username": username, "password": password, "role": role})
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create
