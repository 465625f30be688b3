from __future__ import annotations

from decimal import ROUND_DOWN, Decimal
from typing import List, Optional, Sequence

from smokeapp.db.models import DayRecord
from smokeapp.schemas.day import DayRecordRead, StatisticsSummary

from .history_store import HistoryStore


def truncated_average(counts: Sequence[int]) -> float:
    """Mean cut (not rounded) to one decimal place, 0.0 for no data."""
    if not counts:
        return 0.0
    average = Decimal(sum(counts)) / Decimal(len(counts))
    return float(average.quantize(Decimal("0.1"), rounding=ROUND_DOWN))


class StatisticsEngine:
    """Read-only metrics over the whole history."""

    def __init__(self, store: HistoryStore):
        self.store = store

    def _records(self) -> List[DayRecord]:
        return self.store.fetch_all()

    def total_smokes(self) -> int:
        return sum(record.count for record in self._records())

    def min_day(self) -> Optional[DayRecord]:
        # The last day is still in progress, so it does not count as a minimum
        candidates = self._records()[:-1]
        if not candidates:
            return None
        return min(candidates, key=lambda record: record.count)

    def max_day(self) -> Optional[DayRecord]:
        records = self._records()
        if not records:
            return None
        return max(records, key=lambda record: record.count)

    def average_all(self) -> float:
        return truncated_average([record.count for record in self._records()])

    def average_last(self, days: int) -> float:
        counts = [record.count for record in self._records()]
        return truncated_average(counts[-days:] if days > 0 else [])

    def dynamics(self, days: int) -> float:
        """Change of the last `days` against the `days` before them.

        Positive values mean smoking increased. 0.0 when there are not enough
        records to fill both periods.
        """
        counts = [record.count for record in self._records()]
        if days <= 0 or len(counts) < days * 2:
            return 0.0

        current_sum = sum(counts[-days:])
        past_sum = sum(counts[-2 * days:-days])

        if past_sum == 0:
            return 1.0 if current_sum > 0 else 0.0
        if current_sum == 0:
            return -1.0
        return current_sum / past_sum - 1

    def summary(self, average_days: int, dynamics_days: int) -> StatisticsSummary:
        min_day = self.min_day()
        max_day = self.max_day()
        return StatisticsSummary(
            total_smokes=self.total_smokes(),
            min_day=DayRecordRead.model_validate(min_day) if min_day is not None else None,
            max_day=DayRecordRead.model_validate(max_day) if max_day is not None else None,
            average_all=self.average_all(),
            average_days=average_days,
            average_last=self.average_last(average_days),
            dynamics_days=dynamics_days,
            dynamics=self.dynamics(dynamics_days),
        )
