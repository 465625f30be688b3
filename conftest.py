from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, List, Optional

import pytest
from sqlalchemy.pool import StaticPool

from smokeapp.db.models import DayRecord
from smokeapp.db.session import build_engine, build_session_factory, create_all
from smokeapp.services import SmokeTracker, SqlHistoryStore

NOW = datetime(2024, 3, 10, 12, 0)


class FixedClock:
    """Clock that only moves when the test says so."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, days: int = 0, hours: int = 0) -> None:
        self.now += timedelta(days=days, hours=hours)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def session_factory():
    engine = build_engine(
        "sqlite+pysqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    create_all(engine)
    yield build_session_factory(engine)
    engine.dispose()


@pytest.fixture
def store(session_factory) -> SqlHistoryStore:
    return SqlHistoryStore(session_factory)


@pytest.fixture
def tracker(session_factory, clock) -> SmokeTracker:
    return SmokeTracker(session_factory, user_timezone="UTC", clock=clock)


def seed(
    store: SqlHistoryStore,
    counts: Iterable[int],
    last_day: datetime = NOW,
    limits: Optional[Iterable[Optional[int]]] = None,
) -> List[DayRecord]:
    """Append one record per day, oldest first, the last one on `last_day`."""
    counts = list(counts)
    limits = list(limits) if limits is not None else [None] * len(counts)
    first_day = last_day - timedelta(days=len(counts) - 1)
    return [
        store.append(first_day + timedelta(days=offset), count, limit)
        for offset, (count, limit) in enumerate(zip(counts, limits))
    ]
