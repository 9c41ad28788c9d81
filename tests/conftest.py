"""Shared fixtures: an in-memory MongoDB per test and signed-in sessions on it."""

from __future__ import annotations

from datetime import datetime, timedelta

import mongomock
import pytest
from streamlit.testing.v1 import AppTest

from core.auth import AuthClient
from core.backend import Backend
from core.cache import QueryCache
from core.context import AppContext
from core.db import ensure_indexes

PASSWORD = "s3cret-pass"


class RecordingNotifier:
    def __init__(self):
        self.successes: list[str] = []
        self.errors: list[str] = []

    def success(self, message: str) -> None:
        self.successes.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)


def make_ctx(db, email: str) -> AppContext:
    auth = AuthClient(db)
    auth.sign_up(email, PASSWORD)
    return AppContext(backend=Backend(db, auth), cache=QueryCache(ttl=60, retries=0, retry_delay=0))


@pytest.fixture()
def db():
    database = mongomock.MongoClient()["goal_tracker_test"]
    ensure_indexes(database)
    return database


@pytest.fixture()
def ctx(db) -> AppContext:
    return make_ctx(db, "ada@example.com")


@pytest.fixture()
def other_ctx(db) -> AppContext:
    return make_ctx(db, "grace@example.com")


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def t0() -> datetime:
    return datetime(2024, 3, 6, 9, 0, 0)


@pytest.fixture()
def later(t0):
    return lambda seconds: t0 + timedelta(seconds=seconds)


@pytest.fixture()
def app_for(ctx):
    """Build an AppTest for a view script with the signed-in ``ctx`` in session state."""
    def _build(script) -> AppTest:
        at = AppTest.from_function(script, default_timeout=10)
        at.session_state["ctx"] = ctx
        return at
    return _build
