# tests/conftest.py
from __future__ import annotations

from datetime import datetime, timezone

import pytest

import db
from auth import AuthClient
from controller import AppState

from .fakes import FakeStore, make_session


class Clock:
    def __init__(self):
        self.now = datetime(2025, 1, 1, 9, 0, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now


@pytest.fixture()
def engine():
    eng = db.make_engine("sqlite://")
    db.init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def clock() -> Clock:
    return Clock()


@pytest.fixture()
def auth(engine, clock) -> AuthClient:
    return AuthClient(bind=engine, ttl_minutes=30, clock=clock)


@pytest.fixture()
def store(engine, auth) -> db.TableStore:
    """A real store with a signed-in user."""
    auth.sign_up("owner@example.com", "secret123")
    return db.TableStore(auth, bind=engine)


@pytest.fixture()
def ann():
    return {"id": "m1", "name": "Ann", "role": "Developer"}


@pytest.fixture()
def fake_store(ann) -> FakeStore:
    return FakeStore(members=[ann])


@pytest.fixture()
def state(ann) -> AppState:
    return AppState(session=make_session(), members=[dict(ann)], tasks=[])
