"""Database connection and session management."""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from rentdesk.core.config import get_config

logger = logging.getLogger(__name__)

config = get_config()


def build_engine(database_url: str, lock_timeout_seconds: float | None = None, echo: bool = False) -> Engine:
    """Create an engine whose lock waits are bounded by ``lock_timeout_seconds``."""
    timeout = lock_timeout_seconds if lock_timeout_seconds is not None else config.DB_LOCK_TIMEOUT_SECONDS

    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            echo=echo,
            connect_args={"timeout": timeout, "check_same_thread": False},
        )

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, _record) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        pool_recycle=3600,
        pool_size=10,
        max_overflow=20,
        connect_args={"options": f"-c lock_timeout={int(timeout * 1000)}"},
    )


def build_session_factory(bind: Engine) -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=bind)


engine = build_engine(config.DATABASE_URL, echo=config.DEBUG)
SessionLocal = build_session_factory(engine)


def get_engine() -> Engine:
    """Return the active SQLAlchemy engine."""
    return engine


def read_lock_timeout_ms(bind: Engine | None = None) -> int | None:
    """Lock-wait bound a fresh connection actually runs with, in milliseconds."""
    target = bind or engine
    with target.connect() as conn:
        if target.dialect.name == "sqlite":
            return int(conn.exec_driver_sql("PRAGMA busy_timeout").scalar())
        if target.dialect.name == "postgresql":
            return int(conn.exec_driver_sql("SELECT setting FROM pg_settings WHERE name = 'lock_timeout'").scalar())
    return None


def get_db() -> Generator[Session, None, None]:
    """Yield a session for dependency injection contexts."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """Context-manager wrapper for safe DB session lifecycle."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def verify_database_connection() -> bool:
    """Verify DB connectivity during startup."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:  # pragma: no cover - exercised in deployment.
        logger.exception("database.connection_failed", extra={"event": "database.connection_failed"})
        return False
