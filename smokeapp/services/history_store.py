from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional, Protocol

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, sessionmaker

from smokeapp.db.models import DayRecord
from smokeapp.db.models.day_record import clamp_count
from smokeapp.db.session import SessionLocal, session_scope

logger = logging.getLogger(__name__)


class RecordNotFoundError(LookupError):
    """The day record was deleted or never persisted."""


class HistoryStore(Protocol):
    """Ordered collection of day records the core reads and writes through."""

    def append(self, date: datetime, count: int, limit: Optional[int] = None) -> DayRecord: ...

    def fetch_all(self) -> List[DayRecord]: ...

    def update(
        self,
        record: DayRecord,
        new_date: Optional[datetime] = None,
        new_count: Optional[int] = None,
        new_limit: Optional[int] = None,
    ) -> DayRecord: ...

    def delete(self, record: DayRecord) -> None: ...

    def delete_target_only(self, record: DayRecord) -> DayRecord: ...

    def delete_all(self) -> None: ...


class SqlHistoryStore:
    """SQLAlchemy backed history. Every call runs in its own transaction."""

    def __init__(self, session_factory: sessionmaker[Session] = SessionLocal):
        self.session_factory = session_factory

    def append(self, date: datetime, count: int, limit: Optional[int] = None) -> DayRecord:
        record = DayRecord(
            date=date,
            count=clamp_count(count),
            limit=clamp_count(limit) if limit is not None else None,
        )
        with session_scope(self.session_factory) as session:
            session.add(record)
            session.flush()
        logger.debug("Appended %r", record)
        return record

    def fetch_all(self) -> List[DayRecord]:
        """All records in chronological order, insertion order for equal dates."""
        with session_scope(self.session_factory) as session:
            result = session.execute(select(DayRecord).order_by(DayRecord.date, DayRecord.id))
            return list(result.scalars().all())

    def update(
        self,
        record: DayRecord,
        new_date: Optional[datetime] = None,
        new_count: Optional[int] = None,
        new_limit: Optional[int] = None,
    ) -> DayRecord:
        """Change the given fields; None leaves a field as it is."""
        if new_date is None and new_count is None and new_limit is None:
            return record

        with session_scope(self.session_factory) as session:
            stored = self._get(session, record)
            if new_date is not None:
                stored.date = new_date
            if new_count is not None:
                stored.count = clamp_count(new_count)
            if new_limit is not None:
                stored.limit = clamp_count(new_limit)
        self._sync(record, stored)
        return record

    def delete(self, record: DayRecord) -> None:
        with session_scope(self.session_factory) as session:
            session.delete(self._get(session, record))
        logger.debug("Deleted %r", record)

    def delete_target_only(self, record: DayRecord) -> DayRecord:
        with session_scope(self.session_factory) as session:
            stored = self._get(session, record)
            stored.limit = None
        self._sync(record, stored)
        return record

    def delete_all(self) -> None:
        """Remove every record in one transaction."""
        with session_scope(self.session_factory) as session:
            result = session.execute(delete(DayRecord))
        logger.info("Deleted all day records (%s rows)", result.rowcount)

    @staticmethod
    def _get(session: Session, record: DayRecord) -> DayRecord:
        stored = session.get(DayRecord, record.id) if record.id is not None else None
        if stored is None:
            raise RecordNotFoundError(f"Day record {record.id} does not exist")
        return stored

    @staticmethod
    def _sync(record: DayRecord, stored: DayRecord) -> None:
        # Keep the caller's detached copy in line with what was committed
        if record is stored:
            return
        record.date = stored.date
        record.count = stored.count
        record.limit = stored.limit
