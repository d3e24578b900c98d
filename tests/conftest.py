"""
Shared test fixtures for the police records test suite.

Every test gets a brand-new store, session store and app, all driven by a
fake clock so expiry and year-stamped numbers are deterministic.
"""

import os
import sys
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

import pytest

# Ensure project root is importable
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Override environment BEFORE importing application modules
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from police_records.core.security import get_password_hash
from police_records.core.sessions import SessionStore
from police_records.db.storage import MemStorage
from police_records.main import create_app, seed_default_admin
from police_records.models.user import User

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"
OFFICER_PASSWORD = "officer-pass"


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def storage(clock: FakeClock) -> MemStorage:
    store = MemStorage(clock=clock)
    seed_default_admin(store)
    return store


@pytest.fixture
def sessions(clock: FakeClock) -> SessionStore:
    return SessionStore(max_age=timedelta(hours=24), clock=clock)


@pytest.fixture
def app(storage: MemStorage, sessions: SessionStore) -> FastAPI:
    return create_app(storage=storage, sessions=sessions)


def _client(app: FastAPI) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver")


async def login(client: AsyncClient, username: str, password: str):
    return await client.post(
        "/api/auth/login", json={"username": username, "password": password}
    )


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Anonymous httpx AsyncClient wired to the app."""
    async with _client(app) as client:
        yield client


@pytest.fixture
async def admin_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Client holding a session for the seeded admin."""
    async with _client(app) as client:
        resp = await login(client, ADMIN_USERNAME, ADMIN_PASSWORD)
        assert resp.status_code == 200
        yield client


@pytest.fixture
def officer(storage: MemStorage) -> User:
    """A plain (non-admin) officer account."""
    return storage.create_user(
        {
            "username": "jdoe",
            "email": "jdoe@police.gov",
            "hashed_password": get_password_hash(OFFICER_PASSWORD),
            "first_name": "John",
            "last_name": "Doe",
            "role": "user",
            "badge_number": "B-100",
        }
    )


@pytest.fixture
async def officer_client(app: FastAPI, officer: User) -> AsyncGenerator[AsyncClient, None]:
    """Client holding a session for the plain officer."""
    async with _client(app) as client:
        resp = await login(client, officer.username, OFFICER_PASSWORD)
        assert resp.status_code == 200
        yield client
