"""Tracker facade: foreground refresh, count edits and widget snapshot"""

import json

from conftest import NOW, seed
from smokeapp.schemas import DailyLimit
from smokeapp.services import SmokeTracker, UpdateType


def test_refresh_writes_widget_snapshot(session_factory, clock, tmp_path):
    path = tmp_path / "widget" / "latest.json"
    tracker = SmokeTracker(session_factory, user_timezone="UTC", clock=clock, widget_path=path)
    seed(tracker.store, [4])
    clock.advance(days=1)

    created = tracker.refresh()

    assert len(created) == 1
    data = json.loads(path.read_text())
    assert data["amount"] == 0
    assert data["date"].startswith("2024-03-11")


def test_update_count_over_limit_on_latest_day(tracker):
    exceeded = []
    events = []
    tracker.notifier.subscribe_limit_exceeded(exceeded.append)
    tracker.notifier.subscribe_data(lambda kind, records: events.append(kind))
    records = seed(tracker.store, [1, 1], limits=[2, 2])

    tracker.update_count(records[0], 5)
    assert exceeded == []

    tracker.update_count(records[1], 3)
    assert exceeded == [2]
    assert events == [UpdateType.updated, UpdateType.updated]


def test_failing_listener_does_not_stop_others(tracker):
    received = []

    def broken(kind, records):
        raise RuntimeError("listener bug")

    tracker.notifier.subscribe_data(broken)
    tracker.notifier.subscribe_data(lambda kind, records: received.append(kind))

    tracker.create_day(NOW, 2)

    assert received == [UpdateType.created]


def test_delete_day_and_all(tracker):
    records = seed(tracker.store, [1, 2, 3])

    tracker.delete_day(records[1])
    assert [record.count for record in tracker.records()] == [1, 3]

    tracker.delete_all()
    assert tracker.records() == []


def test_summary_uses_preferences(tracker):
    seed(tracker.store, [1] * 14 + [2] * 14)
    tracker.preferences.average_days = 14
    tracker.preferences.dynamics_days = 14

    summary = tracker.summary()

    assert summary.average_days == 14
    assert summary.average_last == 2.0
    assert summary.dynamics == 1.0


def test_refresh_applies_target_to_today(tracker):
    seed(tracker.store, [2])
    tracker.targets.target_storage.set(DailyLimit(from_date=NOW, max_smokes=3))

    tracker.refresh()

    assert tracker.records()[0].limit == 3


def test_delete_all_removes_widget_snapshot(session_factory, clock, tmp_path):
    path = tmp_path / "latest.json"
    tracker = SmokeTracker(session_factory, user_timezone="UTC", clock=clock, widget_path=path)
    tracker.refresh()
    assert path.exists()

    tracker.delete_all()

    assert not path.exists()


def test_setup_logging_returns_package_logger():
    from smokeapp.logging_config import setup_logging

    assert setup_logging().name == "smokeapp"
