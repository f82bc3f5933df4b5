"""Engine and session management.

SQLite (local development, tests) and PostgreSQL (deployments) are both
supported. The engine is built on first use so importing the app never opens
a connection.
"""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from fastapi import HTTPException
from loguru import logger
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from tritrack.config.settings import settings
from tritrack.core.errors import TriTrackError

_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def _is_sqlite(url: str) -> bool:
    return url.lower().startswith("sqlite")


def _enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite ignores FOREIGN KEY clauses unless asked per connection."""

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, _connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(url: str, **engine_kwargs: Any) -> Engine:
    """Create an engine with TriTrack's per-backend connection options.

    SQLite connections are shareable across threads (FastAPI runs sync
    routes in a thread pool) and enforce foreign keys so ``ON DELETE`` rules
    match PostgreSQL. PostgreSQL connections get a connect timeout, an
    application name and pre-ping/recycle for long-lived pools.
    """
    if _is_sqlite(url):
        engine = create_engine(url, connect_args={"check_same_thread": False}, **engine_kwargs)
        _enable_sqlite_foreign_keys(engine)
        return engine

    return create_engine(
        url,
        connect_args={"connect_timeout": 10, "application_name": "tritrack"},
        pool_pre_ping=True,
        pool_recycle=3600,
        **engine_kwargs,
    )


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        logger.info(f"Initializing database engine: {settings.database_url}")
        _engine = build_engine(settings.database_url)
    return _engine


def _get_session_factory() -> sessionmaker[Session]:
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _session_factory


def init_db() -> None:
    """Create any of the seven tables that do not exist yet."""
    from tritrack.db.models import Base

    Base.metadata.create_all(bind=get_engine())
    logger.info(f"Database tables ready: {', '.join(sorted(Base.metadata.tables))}")


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency yielding one session per request.

    The query client commits its own writes, so the session only needs
    closing here.
    """
    session = _get_session_factory()()
    try:
        yield session
    finally:
        session.close()


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """Session for code outside a request (CLI commands).

    Pending ORM changes are committed on a clean exit. Service errors roll
    back quietly; anything else is logged before rolling back.
    """
    session = _get_session_factory()()
    try:
        yield session
        if session.new or session.dirty or session.deleted:
            session.commit()
    except (HTTPException, TriTrackError):
        session.rollback()
        raise
    except Exception as e:
        logger.error(f"Database session error ({type(e).__name__}), rolling back: {e}")
        session.rollback()
        raise
    finally:
        session.close()
