"""
Song Catalog Test Fixtures

Shared pytest fixtures: an isolated record store per test, services
bound to it, a controllable clock and an HTTP client for the app.
"""

import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

# Ensure the project root is importable when running without installation
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def store():
    from song_catalog_api.app.core.store import RecordStore

    return RecordStore()


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def identity(store):
    from song_catalog_api.app.services.user_service import IdentityService

    return IdentityService(store)


@pytest.fixture
def songs(store, clock):
    from song_catalog_api.app.services.song_service import SongService

    return SongService(store, clock=clock)


@pytest.fixture
def alice(identity):
    account, _ = identity.register("Alice", "alice@example.com", "secret1")
    return account


@pytest.fixture
def bob(identity):
    account, _ = identity.register("Bob", "bob@example.com", "secret2")
    return account


@pytest.fixture
def client(store):
    """A TestClient for an application backed by ``store``."""
    from fastapi.testclient import TestClient
    from song_catalog_api.app.main import create_app

    with TestClient(create_app(store)) as test_client:
        yield test_client


@pytest.fixture
def register(client):
    """Register an account over HTTP and return ``(account, headers)``."""

    def _register(name="Alice", email="alice@example.com", password="secret1"):
        response = client.post(
            "/api/v1/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return body["account"], {"X-User-Id": body["account"]["id"]}

    return _register
