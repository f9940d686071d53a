"""Startup checks for the storage guarantees the rental workflow relies on.

The workflow invariants rest on two partial unique indexes and on bounded
lock waits; startup refuses a database lacking either.
"""

from __future__ import annotations

import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from rentdesk.core.config import get_config
from rentdesk.core.logging_config import configure_logging
from rentdesk.database.db import get_engine, read_lock_timeout_ms, verify_database_connection

logger = logging.getLogger(__name__)

INTEGRITY_INDEXES: dict[str, str] = {
    "rental_requests": "uq_rental_requests_pending_tenant_property",
    "rentals": "uq_rentals_open_property",
}


def missing_integrity_indexes(engine: Engine) -> list[str]:
    """Return ``table.index`` for each invariant-backing unique index the database lacks."""
    inspector = inspect(engine)
    missing = []
    for table, index_name in INTEGRITY_INDEXES.items():
        present: set[str] = set()
        if inspector.has_table(table):
            present = {index["name"] for index in inspector.get_indexes(table) if index.get("unique")}
        if index_name not in present:
            missing.append(f"{table}.{index_name}")
    return missing


def check_lock_timeout(engine: Engine, expected_seconds: float) -> int | None:
    """Raise when connections do not run with the configured lock-wait bound."""
    applied = read_lock_timeout_ms(engine)
    expected = int(expected_seconds * 1000)
    if applied is not None and applied != expected:
        raise RuntimeError(f"Database lock timeout is {applied} ms; DB_LOCK_TIMEOUT_SECONDS requires {expected} ms.")
    return applied


def validate_startup_config() -> None:
    config = get_config()
    if not verify_database_connection():
        if config.DB_CONNECTIVITY_REQUIRED:
            raise RuntimeError("Database connectivity check failed.")
        logger.warning(
            "startup.database.unreachable",
            extra={"event": "startup.database.unreachable"},
        )
        return

    engine = get_engine()
    lock_timeout_ms = check_lock_timeout(engine, config.DB_LOCK_TIMEOUT_SECONDS)

    missing = missing_integrity_indexes(engine)
    if missing and config.DB_CONNECTIVITY_REQUIRED:
        raise RuntimeError(f"Schema is missing integrity indexes: {', '.join(missing)}. Run the migrations.")
    if missing:
        logger.warning(
            "startup.schema.integrity_indexes_missing",
            extra={"event": "startup.schema.integrity_indexes_missing", "missing": ", ".join(missing)},
        )

    logger.info(
        "startup.storage.validated",
        extra={
            "event": "startup.storage.validated",
            "env": config.ENV,
            "dialect": engine.dialect.name,
            "lock_timeout_ms": lock_timeout_ms,
            "request_requires_availability": config.REQUEST_REQUIRES_AVAILABILITY,
        },
    )


def bootstrap() -> None:
    """Initialize logging and check the database before serving."""
    configure_logging()
    validate_startup_config()
