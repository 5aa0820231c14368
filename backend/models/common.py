"""Common database utilities and base models"""

from contextlib import contextmanager

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlalchemy import event
from sqlmodel import create_engine, Session
from typing import Generator

import logging

logger = logging.getLogger("animeweb.db")

_engine = None


def get_engine():  # pragma: no cover
    global _engine
    if _engine is None:
        from settings import DATABASE_URL

        connect_args = (
            {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
        )
        _engine = create_engine(
            DATABASE_URL, connect_args=connect_args, pool_pre_ping=True
        )
        if DATABASE_URL.startswith("sqlite"):
            enable_sqlite_foreign_keys(_engine)
    return _engine


def enable_sqlite_foreign_keys(engine):
    """SQLite only enforces foreign keys when asked, per connection."""

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, _connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def get_session() -> Generator[Session, None, None]:  # pragma: no cover
    """Get database session for FastAPI dependency, always closes session."""
    session = Session(get_engine(), expire_on_commit=False)
    try:
        yield session
    finally:
        session.close()


@contextmanager
def get_db() -> Generator[Session, None, None]:  # pragma: no cover
    """Context manager for database session, used by scripts"""
    session = Session(get_engine(), expire_on_commit=False)
    try:
        yield session
    except Exception as e:
        logger.exception(f"Exception in the database session rolling back - {e}")
        session.rollback()
        raise
    finally:
        session.close()
