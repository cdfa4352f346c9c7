"""
Shared pytest fixtures.

Uses a file-backed SQLite database so no external DB is required, UTC as
the local timezone, and a fixed clock so "today" is always 2026-10-19.
"""
import os

os.environ["DATABASE_URL"] = "sqlite:///./test_ltos.db"
os.environ["TIMEZONE"] = "UTC"
os.environ["STORAGE_KEY"] = "ltos@test"
os.environ["AUTO_CREATE_SCHEMA"] = "true"

from datetime import datetime, timezone  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from ltos.db.base import Base, SessionLocal, engine  # noqa: E402
from ltos.main import app  # noqa: E402
from ltos.models.kv_entry import KeyValueEntry  # noqa: E402
from ltos.schemas.snapshot import Snapshot  # noqa: E402
from ltos.services.calendar import start_of_day  # noqa: E402
from ltos.services.container import SnapshotContainer, get_clock, get_container  # noqa: E402
from ltos.services.store import SqlSnapshotStore  # noqa: E402

# 2026-10-19 09:30:00 UTC
NOW = int(datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc).timestamp()) * 1000
DAY = 86_400_000


class FixedClock:
    """Callable clock that tests can move forward."""

    def __init__(self, now: int):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, days: int = 0, ms: int = 0) -> None:
        self.now += days * DAY + ms


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_store():
    db = SessionLocal()
    try:
        db.query(KeyValueEntry).delete()
        db.commit()
    finally:
        db.close()
    yield


@pytest.fixture()
def now() -> int:
    return NOW


@pytest.fixture()
def snapshot() -> Snapshot:
    """Seed-shaped snapshot whose cycle starts today."""
    return Snapshot(cycle_start=start_of_day(NOW))


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture()
def store() -> SqlSnapshotStore:
    return SqlSnapshotStore(SessionLocal)


@pytest.fixture()
def container(store, clock) -> SnapshotContainer:
    return SnapshotContainer(store, clock)


@pytest.fixture()
def client(container, clock):
    app.dependency_overrides[get_container] = lambda: container
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
