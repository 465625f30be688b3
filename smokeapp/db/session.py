from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from ..config import settings
from .base import Base


def build_engine(database_url: str | None = None, **kwargs) -> Engine:
    database_url = database_url or settings.DATABASE_URL
    return create_engine(database_url, echo=False, future=True, **kwargs)


def build_session_factory(bind: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind, expire_on_commit=False, class_=Session)


engine: Engine = build_engine()
SessionLocal = build_session_factory(engine)


@contextmanager
def session_scope(session_factory: sessionmaker[Session] = SessionLocal) -> Iterator[Session]:
    """Session context manager for DB operations."""
    with session_factory() as session:
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise


def create_all(bind: Engine = engine) -> None:
    """Create all tables (there are no migrations, the schema is small)."""
    from . import models  # noqa: F401

    Base.metadata.create_all(bind)


if __name__ == "__main__":
    create_all()
