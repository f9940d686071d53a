from __future__ import annotations

from decimal import Decimal
from types import SimpleNamespace

import pytest

from rentdesk.auth.caller import CurrentUser
from rentdesk.database.db import build_engine, build_session_factory
from rentdesk.models import Base, Property, User, UserRole


@pytest.fixture
def as_caller():
    def _as_caller(user: User) -> CurrentUser:
        return CurrentUser(user_id=user.id, role=user.role)

    return _as_caller


@pytest.fixture
def session_factory(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'rentdesk_test.db'}", lock_timeout_seconds=1)
    Base.metadata.create_all(bind=engine)
    yield build_session_factory(engine)
    engine.dispose()


@pytest.fixture
def session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def marketplace(session):
    """Two owners, one manager, three tenants and three properties."""
    users = {
        "manager": User(username="mgr_mira", full_name="Mira Patel", email="mira@example.com", role=UserRole.MANAGER),
        "owner": User(username="owner_oscar", full_name="Oscar Lind", email="oscar@example.com", role=UserRole.OWNER),
        "other_owner": User(username="owner_olga", full_name="Olga Berg", role=UserRole.OWNER),
        "t1": User(username="tara", full_name="Tara Osei", email="tara@example.com", role=UserRole.TENANT),
        "t2": User(username="uma", full_name="Uma Reyes", role=UserRole.TENANT),
        "t3": User(username="vik", full_name="Vik Sun", role=UserRole.TENANT),
    }
    session.add_all(users.values())
    session.flush()

    properties = {
        "p1": Property(owner_id=users["owner"].id, locality="Riverside", address="12 Mill Lane", rent=Decimal("1450.00")),
        "p2": Property(owner_id=users["owner"].id, locality="Old Town", address="3 Chapel Street", rent=Decimal("980.00")),
        "p3": Property(owner_id=users["other_owner"].id, locality="Harbor", address="8 Quay Road", rent=Decimal("2100.00")),
    }
    session.add_all(properties.values())
    session.commit()
    return SimpleNamespace(**users, **properties)
