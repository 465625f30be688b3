from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from smokeapp.schemas.day import SmokeItemData

from .history_store import HistoryStore

logger = logging.getLogger(__name__)


def export_latest_day(store: HistoryStore) -> Optional[bytes]:
    """JSON of the most recent day for the home screen widget."""
    records = store.fetch_all()
    if not records:
        return None
    latest = records[-1]
    return SmokeItemData(date=latest.date, amount=latest.count).model_dump_json().encode("utf-8")


def write_widget_snapshot(store: HistoryStore, path: Path) -> bool:
    data = export_latest_day(store)
    if data is None:
        # No history, no snapshot
        path.unlink(missing_ok=True)
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    logger.debug("Widget snapshot written to %s", path)
    return True
