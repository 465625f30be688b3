"""Statistics over the day history and the statistics period preferences"""

import pytest

from conftest import seed
from smokeapp.services import POSSIBLE_DAYS, StatisticsPreferences


def test_empty_history(tracker):
    stats = tracker.statistics
    assert stats.total_smokes() == 0
    assert stats.min_day() is None
    assert stats.max_day() is None
    assert stats.average_all() == 0.0
    assert stats.average_last(7) == 0.0
    assert stats.dynamics(7) == 0.0


def test_total_and_average(tracker):
    seed(tracker.store, [5, 5, 5, 5, 5, 3, 3, 3, 3, 3])

    assert tracker.statistics.total_smokes() == 40
    assert tracker.statistics.average_all() == 4.0


def test_average_is_truncated_not_rounded(tracker):
    seed(tracker.store, [1, 2, 2])
    assert tracker.statistics.average_all() == 1.6


def test_average_last_days(tracker):
    seed(tracker.store, [1, 2, 3, 4])

    assert tracker.statistics.average_last(2) == 3.5
    assert tracker.statistics.average_last(10) == 2.5
    assert tracker.statistics.average_last(3) == 3.0


def test_min_day_skips_current_day(tracker):
    records = seed(tracker.store, [3, 5, 3, 1])

    assert tracker.statistics.min_day().id == records[0].id


def test_max_day_includes_current_day(tracker):
    records = seed(tracker.store, [3, 7, 2, 7, 9])
    assert tracker.statistics.max_day().id == records[-1].id

    tracker.store.update(records[-1], new_count=1)
    assert tracker.statistics.max_day().id == records[1].id


def test_dynamics_needs_two_full_periods(tracker):
    seed(tracker.store, [4] * 13)
    assert tracker.statistics.dynamics(7) == 0.0


def test_dynamics_flat_history(tracker):
    seed(tracker.store, [10] * 10)
    assert tracker.statistics.dynamics(5) == 0.0


def test_dynamics_quit_and_restart(tracker):
    records = seed(tracker.store, [3] * 7 + [0] * 7)
    assert tracker.statistics.dynamics(7) == -1.0

    for record in records[:7]:
        tracker.store.update(record, new_count=0)
    assert tracker.statistics.dynamics(7) == 0.0

    tracker.store.update(records[-1], new_count=2)
    assert tracker.statistics.dynamics(7) == 1.0


def test_dynamics_ratio(tracker):
    seed(tracker.store, [9, 2, 2, 3, 3])

    assert tracker.statistics.dynamics(2) == pytest.approx(0.5)
    assert tracker.statistics.dynamics(1) == 0.0


def test_summary(tracker):
    seed(tracker.store, [2, 4, 6, 8])

    summary = tracker.statistics.summary(average_days=1, dynamics_days=1)

    assert summary.total_smokes == 20
    assert summary.min_day.count == 2
    assert summary.max_day.count == 8
    assert summary.average_last == 8.0
    assert summary.dynamics == pytest.approx(8 / 6 - 1)


def test_preferences_default_and_persist(session_factory):
    preferences = StatisticsPreferences(session_factory, default_average_days=7, default_dynamics_days=7)
    assert preferences.average_days == 7
    assert preferences.dynamics_days == 7

    preferences.average_days = 14
    preferences.dynamics_days = 30

    reloaded = StatisticsPreferences(session_factory)
    assert reloaded.average_days == 14
    assert reloaded.dynamics_days == 30


def test_preferences_reject_unknown_period(session_factory):
    preferences = StatisticsPreferences(session_factory)
    assert 5 not in POSSIBLE_DAYS

    with pytest.raises(ValueError):
        preferences.average_days = 5
