from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, List, Optional, Sequence

from smokeapp.db.models import DayRecord
from smokeapp.schemas.target import Target

logger = logging.getLogger(__name__)


class UpdateType(str, Enum):
    created = "created"
    updated = "updated"
    deleted = "deleted"


DataListener = Callable[[UpdateType, List[DayRecord]], None]
TargetListener = Callable[[Optional[Target]], None]
LimitListener = Callable[[int], None]


class ChangeNotifier:
    """Synchronous listener lists for data, target and limit events."""

    def __init__(self) -> None:
        self._data_listeners: List[DataListener] = []
        self._target_listeners: List[TargetListener] = []
        self._limit_listeners: List[LimitListener] = []

    def subscribe_data(self, listener: DataListener) -> None:
        self._data_listeners.append(listener)

    def subscribe_target(self, listener: TargetListener) -> None:
        self._target_listeners.append(listener)

    def subscribe_limit_exceeded(self, listener: LimitListener) -> None:
        self._limit_listeners.append(listener)

    def notify_data(self, kind: UpdateType, records: Sequence[DayRecord]) -> None:
        self._dispatch(self._data_listeners, kind, list(records))

    def notify_target(self, target: Optional[Target]) -> None:
        self._dispatch(self._target_listeners, target)

    def notify_limit_exceeded(self, limit: int) -> None:
        self._dispatch(self._limit_listeners, limit)

    @staticmethod
    def _dispatch(listeners: Sequence[Callable[..., None]], *args) -> None:
        for listener in listeners:
            try:
                listener(*args)
            except Exception:
                logger.exception("Listener %r failed", listener)
