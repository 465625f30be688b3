from __future__ import annotations

from sqlalchemy.orm import Session, sessionmaker

from smokeapp.config import settings
from smokeapp.db.models import AppSetting
from smokeapp.db.session import SessionLocal, session_scope

POSSIBLE_DAYS = (1, 7, 14, 30)

AVERAGE_DAYS_KEY = "average_days"
DYNAMICS_DAYS_KEY = "dynamics_days"


class StatisticsPreferences:
    """Periods (in days) the statistics screen averages and compares over."""

    def __init__(
        self,
        session_factory: sessionmaker[Session] = SessionLocal,
        default_average_days: int = settings.DEFAULT_AVERAGE_DAYS,
        default_dynamics_days: int = settings.DEFAULT_DYNAMICS_DAYS,
    ):
        self.session_factory = session_factory
        self.default_average_days = default_average_days
        self.default_dynamics_days = default_dynamics_days

    @property
    def average_days(self) -> int:
        return self._read(AVERAGE_DAYS_KEY, self.default_average_days)

    @average_days.setter
    def average_days(self, days: int) -> None:
        self._write(AVERAGE_DAYS_KEY, days)

    @property
    def dynamics_days(self) -> int:
        return self._read(DYNAMICS_DAYS_KEY, self.default_dynamics_days)

    @dynamics_days.setter
    def dynamics_days(self, days: int) -> None:
        self._write(DYNAMICS_DAYS_KEY, days)

    def _read(self, key: str, default: int) -> int:
        with session_scope(self.session_factory) as session:
            row = session.get(AppSetting, key)
            value = row.value if row is not None else None
        if value is None or not value.isdigit() or int(value) <= 0:
            return default
        return int(value)

    def _write(self, key: str, days: int) -> None:
        if days not in POSSIBLE_DAYS:
            raise ValueError(f"{key} must be one of {POSSIBLE_DAYS}, got {days}")
        with session_scope(self.session_factory) as session:
            row = session.get(AppSetting, key)
            if row is None:
                session.add(AppSetting(key=key, value=str(days)))
            else:
                row.value = str(days)
