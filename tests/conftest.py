# File: tests/conftest.py

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from user_api.core.config import Settings
from user_api.db.session import build_engine, build_session_factory
from user_api.main import create_application


@pytest.fixture
def settings():
    return Settings(database_url="sqlite://", environment="test", max_page_limit=50)


@pytest.fixture
def engine():
    # one shared connection so every session sees the same in-memory database
    engine = build_engine("sqlite://", poolclass=StaticPool)
    yield engine
    engine.dispose()


@pytest.fixture
def app(settings, engine):
    return create_application(settings, engine)


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def db(client, engine):
    session = build_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(client):
    def _make_user(**overrides):
        payload = {
            "firstName": "Ahtasham",
            "lastName": "Khan",
            "email": "ahtasham@example.com",
        }
        payload.update(overrides)
        resp = client.post("/api/users", json=payload)
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    return _make_user
