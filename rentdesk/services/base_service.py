"""Shared service base with robust session and transaction lifecycle behavior."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from rentdesk.core.exceptions import ConflictError, InternalError, RentDeskError, StoreTimeoutError
from rentdesk.database import db as database

logger = logging.getLogger(__name__)

# PostgreSQL lock_not_available / query_canceled (statement or lock timeout).
_PG_TIMEOUT_CODES = {"55P03", "57014"}


def is_lock_timeout(exc: OperationalError) -> bool:
    """True when the driver reports a lock wait that exceeded its bound."""
    orig = getattr(exc, "orig", None)
    if getattr(orig, "pgcode", None) in _PG_TIMEOUT_CODES:
        return True
    text = str(orig or exc).lower()
    return "database is locked" in text or "lock timeout" in text


class BaseService:
    """Base class for services that operate on a SQLAlchemy session."""

    def __init__(self, db: Session | None = None) -> None:
        self.db = db or database.SessionLocal()

    @contextmanager
    def transaction(self, conflict_message: str = "Operation conflicts with existing data.") -> Iterator[Session]:
        """Commit on success; roll back and translate storage errors on every other exit."""
        try:
            yield self.db
            self.db.commit()
        except RentDeskError:
            self.db.rollback()
            raise
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning(
                "store.constraint_conflict",
                extra={"event": "store.constraint_conflict", "detail": str(exc.orig)},
            )
            raise ConflictError(conflict_message) from exc
        except OperationalError as exc:
            self.db.rollback()
            if is_lock_timeout(exc):
                logger.warning("store.lock_timeout", extra={"event": "store.lock_timeout"})
                raise StoreTimeoutError("The data store did not respond in time; please retry.") from exc
            logger.exception("store.operational_error", extra={"event": "store.operational_error"})
            raise InternalError("Unexpected storage failure.") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("store.unexpected_error", extra={"event": "store.unexpected_error"})
            raise InternalError("Unexpected storage failure.") from exc
        except Exception:
            self.db.rollback()
            raise
