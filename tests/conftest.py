"""
Shared pytest fixtures for the BeeTrail API tests.

Every test gets its own application bound to a fresh SQLite file under
``tmp_path``.  ``TestClient`` is used as a context manager so the
lifespan hook runs and the schema is created.
"""

from typing import Callable, Dict, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from beetrail_api.app.core.config import Settings
from beetrail_api.app.core.db import Database
from beetrail_api.app.main import create_app


TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(database_url=str(tmp_path / "beetrail-test.db"), jwt_secret=TEST_SECRET, log_level="WARNING")


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(settings: Settings) -> Database:
    database = Database(settings.database_url)
    database.init()
    return database


@pytest.fixture
def login(client: TestClient) -> Callable[..., Dict[str, str]]:
    """Register a user (if needed) and return ``Authorization`` headers for it."""

    def _login(username: str, role: str = "beekeeper", password: str = "password123") -> Dict[str, str]:
        client.post("/auth/register", json={"username": username, "password": password, "role": role})
        resp = client.post("/auth/login", json={"username": username, "password": password})
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['token']}"}

    return _login


@pytest.fixture
def beekeeper_headers(login) -> Dict[str, str]:
    return login("bee1", "beekeeper")


@pytest.fixture
def admin_headers(login) -> Dict[str, str]:
    return login("queen", "admin")
