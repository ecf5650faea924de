"""Pytest fixtures for the task API."""

import os

# Set env vars before importing anything from app
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text

from app.core.config import Settings
from app.core.deadline import Deadline
from app.db.init_db import init_db
from app.db.session import Database
from app.main import create_app


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def settings():
    return Settings(DATABASE_URL="sqlite://", REQUEST_TIMEOUT=5.0, SCHEMA_TIMEOUT=5.0)


@pytest.fixture
def database(settings):
    # in-memory SQLite on a StaticPool: one fresh database per test
    database = Database(settings.DATABASE_URL)
    yield database
    database.close()


@pytest.fixture
def client(settings, database):
    app = create_app(settings, database)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def broken_client(client, database):
    """Client whose store fails every statement: the table is gone after startup."""
    with database.engine.begin() as conn:
        conn.execute(text("DROP TABLE tasks"))
    return client


@pytest.fixture
def db(database):
    init_db(database)
    with database.session(Deadline(5.0)) as session:
        yield session


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def task_payload():
    return {
        "title": "A",
        "description": "B",
        "due_date": "2024-12-31T23:59:59Z",
    }
