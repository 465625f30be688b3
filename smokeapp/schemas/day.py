from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class DayRecordRead(BaseModel):
    id: int
    date: datetime
    count: int
    limit: Optional[int]

    model_config = dict(from_attributes=True)


class SmokeItemData(BaseModel):
    """Latest day snapshot shared with the home screen widget."""

    date: datetime
    amount: int


class StatisticsSummary(BaseModel):
    total_smokes: int
    min_day: Optional[DayRecordRead]
    max_day: Optional[DayRecordRead]
    average_all: float
    average_days: int
    average_last: float
    dynamics_days: int
    dynamics: float
