"""Dependency providers for API handlers and scripts."""

from __future__ import annotations

from collections.abc import Generator

from sqlalchemy.orm import Session

from rentdesk.auth.caller import CurrentUser, from_claims
from rentdesk.auth.jwt import decode_jwt
from rentdesk.core.config import Config, get_config
from rentdesk.database.db import get_db


def get_settings() -> Config:
    """Return validated application configuration."""
    return get_config()


def get_db_session() -> Generator[Session, None, None]:
    """Yield SQLAlchemy session for dependency injection."""
    yield from get_db()


def get_current_user(token: str, settings: Config | None = None) -> CurrentUser:
    """Resolve the caller from a bearer token."""
    cfg = settings or get_settings()
    return from_claims(decode_jwt(token=token, secret=cfg.JWT_SECRET))
