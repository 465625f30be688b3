from __future__ import annotations

import logging
import math
from datetime import datetime
from decimal import ROUND_DOWN, Decimal
from fractions import Fraction
from typing import Callable, List, Optional, Sequence

from smokeapp.db.models import DayRecord
from smokeapp.schemas.target import DailyLimit, QuitSchedule, Target
from smokeapp.utils.timezone_utils import calendar_day, utc_now, whole_calendar_days

from .history_store import HistoryStore
from .notifier import ChangeNotifier
from .target_storage import TargetStorage

logger = logging.getLogger(__name__)


class TargetEngine:
    """Owns the active target and answers which limit applies to a day.

    Limits are persisted on the day records themselves. A quit schedule is
    anchored on the record of its start day: the limit stored there is the
    starting point of the linear decay, so later days can be computed even
    after the initial limit was edited on that record.
    """

    def __init__(
        self,
        store: HistoryStore,
        target_storage: TargetStorage,
        notifier: ChangeNotifier,
        user_timezone: Optional[str] = None,
        clock: Callable[[], datetime] = utc_now,
        legacy_decay: bool = False,
    ):
        self.store = store
        self.target_storage = target_storage
        self.notifier = notifier
        self.user_timezone = user_timezone
        self.clock = clock
        self.legacy_decay = legacy_decay

    @property
    def target(self) -> Optional[Target]:
        return self.target_storage.get()

    def set_target(self, target: Target) -> None:
        """Replace the active target and apply it to today's record."""
        self.target_storage.set(target)
        logger.info("Target set: %s", target.kind)

        today = self._today_record(self.store.fetch_all())
        if today is not None:
            self.store.update(today, new_limit=target.day_value)
        self.repair_quit_anchor()
        self.notifier.notify_target(target)

    def delete_target(self) -> None:
        """Drop the active target and clear limits from its anchor day onwards."""
        target = self.target
        self.target_storage.delete()

        if target is not None:
            start = calendar_day(target.from_date, self.user_timezone)
            for record in self.store.fetch_all():
                if record.limit is not None and calendar_day(record.date, self.user_timezone) >= start:
                    self.store.delete_target_only(record)
            logger.info("Target deleted")
        self.notifier.notify_target(None)

    def limit_for_day(self, day: datetime, records: Optional[Sequence[DayRecord]] = None) -> Optional[int]:
        """Limit for the calendar day of `day`, None when it cannot be computed."""
        target = self.target
        if target is None:
            return None

        if isinstance(target, DailyLimit):
            if whole_calendar_days(target.from_date, day, self.user_timezone) < 0:
                return None
            return target.max_smokes

        if records is None:
            records = self.store.fetch_all()
        return self._quit_schedule_limit(target, day, records)

    def _quit_schedule_limit(
        self, target: QuitSchedule, day: datetime, records: Sequence[DayRecord]
    ) -> Optional[int]:
        anchor = self._find_record(records, target.from_date)
        if anchor is None or anchor.limit is None:
            return None

        elapsed = whole_calendar_days(anchor.date, day, self.user_timezone)
        if elapsed <= 0:
            return None

        anchor_limit = anchor.limit
        if anchor_limit == 0:
            return 0

        if self.legacy_decay:
            # Integer step first, as the first app versions did
            daily_fraction = (anchor_limit // target.total_days) / anchor_limit
            decrease = int(anchor_limit * daily_fraction * elapsed)
        else:
            decrease = math.floor(Fraction(anchor_limit * elapsed, target.total_days) + Fraction(1, 2))

        return max(anchor_limit - decrease, 0)

    def repair_quit_anchor(self) -> Optional[DayRecord]:
        """Give the quit schedule anchor record its initial limit if it has none."""
        target = self.target
        if not isinstance(target, QuitSchedule):
            return None

        anchor = self._find_record(self.store.fetch_all(), target.from_date)
        if anchor is None or anchor.limit is not None:
            return None
        logger.info("Quit schedule anchor had no limit, setting %s", target.initial_limit)
        return self.store.update(anchor, new_limit=target.initial_limit)

    def sync_current_day(self) -> Optional[DayRecord]:
        """Make today's record agree with the active target."""
        today = self._today_record(self.store.fetch_all())
        if today is None:
            return None

        target = self.target
        if target is None:
            if today.limit is not None:
                return self.store.delete_target_only(today)
            return None

        if today.limit is None:
            return self.store.update(today, new_limit=target.day_value)
        return None

    def performance(self) -> Optional[float]:
        """Target fulfilment ratio: limit sum over smoke sum since the target start.

        Above 1 means the user stayed under the limits, below 1 means the
        limits were exceeded. -1 and 1 mark the cases where one of the sums
        is zero.
        """
        target = self.target
        if target is None:
            return None

        start = calendar_day(target.from_date, self.user_timezone)
        records = [
            record
            for record in self.store.fetch_all()
            if calendar_day(record.date, self.user_timezone) >= start
        ]

        limit_sum = sum(record.limit or 0 for record in records)
        smoke_sum = sum(record.count for record in records)

        if limit_sum == 0 and smoke_sum == 0:
            return None
        if limit_sum == 0:
            return -1.0
        if smoke_sum == 0:
            return 1.0

        ratio = Decimal(limit_sum) / Decimal(smoke_sum)
        return float(ratio.quantize(Decimal("0.01"), rounding=ROUND_DOWN))

    def days_left_to_quit(self) -> Optional[int]:
        target = self.target
        if not isinstance(target, QuitSchedule):
            return None

        days_passed = whole_calendar_days(target.from_date, self.clock(), self.user_timezone)
        if days_passed < 0:
            return None
        return target.total_days - days_passed

    @staticmethod
    def is_limit_exceeded(record: DayRecord) -> bool:
        return record.limit is not None and record.limit >= 0 and record.count > record.limit

    def all_time_minimal_smokes(self) -> Optional[int]:
        """Smallest non-zero count, the current (unfinished) day excluded."""
        counts = [record.count for record in self.store.fetch_all()[:-1] if record.count != 0]
        return min(counts) if counts else None

    def _find_record(self, records: Sequence[DayRecord], moment: datetime) -> Optional[DayRecord]:
        day = calendar_day(moment, self.user_timezone)
        return next(
            (record for record in records if calendar_day(record.date, self.user_timezone) == day),
            None,
        )

    def _today_record(self, records: List[DayRecord]) -> Optional[DayRecord]:
        return self._find_record(records, self.clock())
