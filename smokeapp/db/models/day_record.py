from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import SmallInteger
from sqlalchemy.orm import Mapped, mapped_column

from ..base import Base
from ...utils.timezone_utils import utc_now

# SmallInteger upper bound
MAX_COUNT = 32767


def clamp_count(value: int) -> int:
    return max(0, min(int(value), MAX_COUNT))


class DayRecord(Base):
    """Smokes logged for one calendar day and the limit that applied to it."""

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    date: Mapped[datetime] = mapped_column(index=True)
    count: Mapped[int] = mapped_column(SmallInteger, default=0)
    limit: Mapped[Optional[int]] = mapped_column(SmallInteger, nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)

    def __repr__(self) -> str:
        return f"DayRecord(id={self.id}, date={self.date}, count={self.count}, limit={self.limit})"
