from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from sqlalchemy.orm import Session, sessionmaker

from smokeapp.config import settings
from smokeapp.db.models import DayRecord
from smokeapp.db.session import SessionLocal
from smokeapp.schemas.day import StatisticsSummary
from smokeapp.schemas.target import Target
from smokeapp.utils.timezone_utils import utc_now

from .day_provisioner import DayProvisioner
from .history_store import SqlHistoryStore
from .notifier import ChangeNotifier, UpdateType
from .preferences import StatisticsPreferences
from .statistics import StatisticsEngine
from .target_engine import TargetEngine
from .target_storage import TargetStorage
from .widget_export import write_widget_snapshot

logger = logging.getLogger(__name__)


class SmokeTracker:
    """Entry point for the UI: wires the store, the engines and the notifier."""

    def __init__(
        self,
        session_factory: sessionmaker[Session] = SessionLocal,
        user_timezone: Optional[str] = None,
        clock: Callable[[], datetime] = utc_now,
        legacy_decay: bool = False,
        widget_path: Optional[Path] = None,
    ):
        self.clock = clock
        self.widget_path = widget_path
        self.notifier = ChangeNotifier()
        self.store = SqlHistoryStore(session_factory)
        self.targets = TargetEngine(
            self.store,
            TargetStorage(session_factory),
            self.notifier,
            user_timezone=user_timezone,
            clock=clock,
            legacy_decay=legacy_decay,
        )
        self.days = DayProvisioner(
            self.store, self.targets, self.notifier, user_timezone=user_timezone, clock=clock
        )
        self.statistics = StatisticsEngine(self.store)
        self.preferences = StatisticsPreferences(session_factory)

    @classmethod
    def from_settings(cls, session_factory: sessionmaker[Session] = SessionLocal) -> "SmokeTracker":
        return cls(
            session_factory,
            user_timezone=settings.DEFAULT_TIMEZONE,
            legacy_decay=settings.QUIT_SCHEDULE_LEGACY_DECAY,
            widget_path=settings.WIDGET_DATA_PATH,
        )

    def refresh(self) -> List[DayRecord]:
        """Run on every app start or return to foreground."""
        self.days.remove_duplicates()
        created = self.days.ensure_up_to_date()
        self.targets.repair_quit_anchor()
        self.targets.sync_current_day()
        self._write_widget()
        return created

    def records(self) -> List[DayRecord]:
        return self.store.fetch_all()

    def create_day(self, day: datetime, count: int = 0) -> DayRecord:
        record = self.days.create_day(day, count)
        self._write_widget()
        return record

    def update_count(self, record: DayRecord, count: int) -> DayRecord:
        self.store.update(record, new_count=count)
        records = self.store.fetch_all()
        self.notifier.notify_data(UpdateType.updated, records)

        if records and records[-1].id == record.id and self.targets.is_limit_exceeded(record):
            self.notifier.notify_limit_exceeded(record.limit)
        self._write_widget()
        return record

    def delete_day(self, record: DayRecord) -> None:
        self.store.delete(record)
        self.notifier.notify_data(UpdateType.deleted, self.store.fetch_all())
        self._write_widget()

    def delete_all(self) -> None:
        self.store.delete_all()
        self.notifier.notify_data(UpdateType.deleted, [])
        self._write_widget()

    def set_target(self, target: Target) -> None:
        self.targets.set_target(target)

    def delete_target(self) -> None:
        self.targets.delete_target()

    def summary(self) -> StatisticsSummary:
        return self.statistics.summary(self.preferences.average_days, self.preferences.dynamics_days)

    def _write_widget(self) -> None:
        if self.widget_path is None:
            return
        try:
            write_widget_snapshot(self.store, self.widget_path)
        except OSError:
            logger.exception("Could not write widget snapshot to %s", self.widget_path)
