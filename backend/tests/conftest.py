"""Shared fixtures: each test gets its own SQLite file under tmp_path."""

import pytest
from fastapi.testclient import TestClient

from wms.core.database import WMSDatabase


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
async def store(database_url):
    """Fresh, initialized store for each test."""
    store = WMSDatabase(database_url)
    await store.init()
    yield store
    await store.close()


@pytest.fixture
async def db(store):
    async with store.session() as session:
        yield session


@pytest.fixture
def client(database_url, monkeypatch):
    """API client whose lifespan opens a store on the temporary database."""
    from wms import main

    monkeypatch.setattr(main.settings, "DATABASE_URL", database_url)
    with TestClient(main.app) as test_client:
        yield test_client
