"""
Test configuration and fixtures for the URL shortener.
Every test gets its own SQLite file database.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from config import Settings
from database import Database
from main import create_app

TEST_EMAIL = "ada@example.com"
TEST_PASSWORD = "correct horse battery staple"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        secret_key="test-secret",
    )


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def run_db(settings):
    """Run ``fn(db)`` against a fresh Database on its own event loop."""

    def runner(fn):
        async def main():
            db = Database(settings.database_url)
            await db.init_models()
            try:
                return await fn(db)
            finally:
                await db.dispose()

        return asyncio.run(main())

    return runner


@pytest.fixture
def in_app_db(client):
    """Run ``fn(session)`` inside the running app's event loop."""

    def runner(fn):
        async def main():
            async with client.app.state.db.session_maker() as session:
                return await fn(session)

        return client.portal.call(main)

    return runner


def signup(client, email=TEST_EMAIL, password=TEST_PASSWORD, full_name="Ada Lovelace"):
    return client.post("/user", json={"fullName": full_name, "userEmail": email, "userPassword": password})


def login(client, email=TEST_EMAIL, password=TEST_PASSWORD):
    return client.post("/user/login", json={"userEmail": email, "userPassword": password})


@pytest.fixture
def auth_client(client):
    """Client carrying a valid session cookie."""
    assert signup(client).status_code == 200
    assert login(client).status_code == 200
    return client
