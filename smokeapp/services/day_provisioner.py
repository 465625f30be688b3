from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Callable, Dict, List, Optional

from smokeapp.db.models import DayRecord
from smokeapp.utils.timezone_utils import (
    calendar_day,
    same_local_time_on,
    utc_now,
    whole_calendar_days,
)

from .history_store import HistoryStore
from .notifier import ChangeNotifier, UpdateType
from .target_engine import TargetEngine

logger = logging.getLogger(__name__)


class DayProvisioner:
    """Keeps exactly one record per calendar day up to today."""

    def __init__(
        self,
        store: HistoryStore,
        target_engine: TargetEngine,
        notifier: ChangeNotifier,
        user_timezone: Optional[str] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.target_engine = target_engine
        self.notifier = notifier
        self.user_timezone = user_timezone
        self.clock = clock

    def create_day(self, day: datetime, count: int = 0) -> DayRecord:
        """Create a record for `day` with the limit the active target gives it."""
        limit = self.target_engine.limit_for_day(day)
        record = self.store.append(day, count, limit)
        self.notifier.notify_data(UpdateType.created, self.store.fetch_all())
        return record

    def ensure_up_to_date(self) -> List[DayRecord]:
        """Backfill zero-count records for every day missing since the last one."""
        now = self.clock()
        records = self.store.fetch_all()
        if not records:
            logger.info("History is empty, creating today's record")
            return [self.create_day(now)]

        days_missing = whole_calendar_days(records[-1].date, now, self.user_timezone)
        if days_missing <= 0:
            return []

        logger.info("Backfilling %s day(s)", days_missing)
        created: List[DayRecord] = []
        last_day = calendar_day(records[-1].date, self.user_timezone)
        for step in range(1, days_missing + 1):
            if step == days_missing:
                day = now
            else:
                day = same_local_time_on(last_day + timedelta(days=step), now, self.user_timezone)
            try:
                created.append(self.create_day(day))
            except Exception:
                logger.exception("Could not create record for %s", day.date())
        return created

    def remove_duplicates(self) -> int:
        """Delete extra records sharing a calendar day, keeping the first inserted."""
        survivors: Dict[date, DayRecord] = {}
        duplicates: List[DayRecord] = []
        for record in sorted(self.store.fetch_all(), key=lambda item: item.id):
            day = calendar_day(record.date, self.user_timezone)
            if day in survivors:
                duplicates.append(record)
            else:
                survivors[day] = record

        for record in duplicates:
            self.store.delete(record)

        if duplicates:
            logger.warning("Removed %s duplicated day record(s)", len(duplicates))
            self.notifier.notify_data(UpdateType.deleted, self.store.fetch_all())
        return len(duplicates)
