"""SQL history store: ordering, partial updates, clamping and deletion"""

from datetime import timedelta

import pytest

from conftest import NOW
from smokeapp.services import RecordNotFoundError


def test_fetch_all_is_chronological(store):
    store.append(NOW, 1)
    store.append(NOW - timedelta(days=2), 2)
    store.append(NOW - timedelta(days=1), 3)

    assert [record.count for record in store.fetch_all()] == [2, 3, 1]


def test_update_changes_only_given_fields(store):
    record = store.append(NOW, 2, 5)

    store.update(record)
    store.update(record, new_count=4)

    stored = store.fetch_all()[0]
    assert (stored.count, stored.limit, stored.date) == (4, 5, NOW)
    assert record.count == 4

    moved = NOW - timedelta(days=1)
    store.update(record, new_date=moved, new_limit=1)
    stored = store.fetch_all()[0]
    assert (stored.count, stored.limit, stored.date) == (4, 1, moved)


def test_counts_are_clamped(store):
    record = store.append(NOW, 40000, -3)
    assert (record.count, record.limit) == (32767, 0)

    store.update(record, new_count=-1)
    assert store.fetch_all()[0].count == 0


def test_delete_target_only(store):
    record = store.append(NOW, 2, 5)

    store.delete_target_only(record)

    assert record.limit is None
    assert store.fetch_all()[0].limit is None
    assert store.fetch_all()[0].count == 2


def test_delete_missing_record_raises(store):
    record = store.append(NOW, 1)
    store.delete(record)

    with pytest.raises(RecordNotFoundError):
        store.delete(record)
    with pytest.raises(RecordNotFoundError):
        store.update(record, new_count=3)


def test_delete_all(store):
    store.delete_all()
    assert store.fetch_all() == []

    for offset in range(3):
        store.append(NOW + timedelta(days=offset), offset)
    store.delete_all()

    assert store.fetch_all() == []
