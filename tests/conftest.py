"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from subway_api.app.core import db
from subway_api.app.core.config import settings
from subway_api.app.main import create_app


@pytest.fixture
def database(tmp_path, monkeypatch):
    """Point the application at a fresh, migrated SQLite file."""
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "subway.db"))
    db.init_db()
    return settings.database_url


@pytest.fixture
def conn(database):
    """Raw connection for repository and service tests."""
    connection = db.get_connection()
    yield connection
    connection.close()


@pytest.fixture
def client(database):
    with TestClient(create_app()) as test_client:
        yield test_client
