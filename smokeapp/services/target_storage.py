from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session, sessionmaker

from smokeapp.db.models import AppSetting
from smokeapp.db.session import SessionLocal, session_scope
from smokeapp.schemas.target import Target, decode_target, encode_target

logger = logging.getLogger(__name__)

TARGET_KEY = "target"


class TargetStorage:
    """Keeps the single active target as an encoded JSON blob."""

    def __init__(self, session_factory: sessionmaker[Session] = SessionLocal):
        self.session_factory = session_factory

    def get(self) -> Optional[Target]:
        with session_scope(self.session_factory) as session:
            row = session.get(AppSetting, TARGET_KEY)
            blob = row.value if row is not None else None
        if blob is None:
            return None
        try:
            return decode_target(blob)
        except ValidationError:
            logger.warning("Stored target could not be decoded, treating it as absent")
            return None

    def set(self, target: Target) -> None:
        blob = encode_target(target)
        with session_scope(self.session_factory) as session:
            row = session.get(AppSetting, TARGET_KEY)
            if row is None:
                session.add(AppSetting(key=TARGET_KEY, value=blob))
            else:
                row.value = blob

    def delete(self) -> None:
        with session_scope(self.session_factory) as session:
            row = session.get(AppSetting, TARGET_KEY)
            if row is not None:
                session.delete(row)
