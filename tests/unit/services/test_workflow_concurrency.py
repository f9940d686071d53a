"""Two sessions racing on the same rows through the file-backed SQLite store."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from rentdesk.core.exceptions import ConflictError, StoreTimeoutError
from rentdesk.models import Rental, RentalRequest, RentalRequestStatus
from rentdesk.services.availability_service import AvailabilityService
from rentdesk.services.rental_request_service import RentalRequestService
from rentdesk.services.rental_service import RentalService
from rentdesk.services.workflow_service import RentalWorkflowService

FIXED_NOW = datetime(2026, 3, 2, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def two_workflows(session_factory):
    first, second = session_factory(), session_factory()
    yield (
        RentalWorkflowService(db=first, clock=lambda: FIXED_NOW, reject_when_occupied=False),
        RentalWorkflowService(db=second, clock=lambda: FIXED_NOW, reject_when_occupied=False),
    )
    first.close()
    second.close()


def _open_rentals(session_factory, property_id):
    with session_factory() as db:
        return db.scalar(
            select(func.count()).select_from(Rental).where(Rental.property_id == property_id, Rental.end_date.is_(None))
        )


def test_stale_reviewer_sees_the_committed_decision(session_factory, marketplace, two_workflows, as_caller):
    first, second = two_workflows
    manager = as_caller(marketplace.manager)
    created = first.create_request(as_caller(marketplace.t1), marketplace.p1.id)

    stale = second.db.get(RentalRequest, created.request_id)
    assert stale.status is RentalRequestStatus.PENDING

    first.approve_request(manager, created.request_id)
    with pytest.raises(ConflictError):
        second.reject_request(manager, created.request_id, reason="late")

    with session_factory() as db:
        request = db.get(RentalRequest, created.request_id)
        assert request.status is RentalRequestStatus.APPROVED
        assert request.rejection_reason is None


def test_racing_approvals_for_one_property_commit_once(
    session_factory, marketplace, two_workflows, as_caller, monkeypatch
):
    first, second = two_workflows
    manager = as_caller(marketplace.manager)
    r1 = first.create_request(as_caller(marketplace.t1), marketplace.p1.id)
    r2 = first.create_request(as_caller(marketplace.t2), marketplace.p1.id)

    # Both reviewers pass the availability pre-check.
    monkeypatch.setattr(AvailabilityService, "is_available", lambda self, property_id: True)

    first.approve_request(manager, r1.request_id)
    with pytest.raises(ConflictError, match="currently rented"):
        second.approve_request(manager, r2.request_id)

    assert _open_rentals(session_factory, marketplace.p1.id) == 1
    with session_factory() as db:
        assert db.get(RentalRequest, r2.request_id).status is RentalRequestStatus.PENDING


def test_racing_duplicate_requests_leave_one_pending(
    session_factory, marketplace, two_workflows, as_caller, monkeypatch
):
    first, second = two_workflows
    monkeypatch.setattr(RentalRequestService, "find_pending", lambda self, tenant_id, property_id: None)

    first.create_request(as_caller(marketplace.t1), marketplace.p1.id)
    with pytest.raises(ConflictError, match="pending request"):
        second.create_request(as_caller(marketplace.t1), marketplace.p1.id)

    with session_factory() as db:
        assert db.scalar(select(func.count()).select_from(RentalRequest)) == 1


def test_blocked_writer_times_out(session_factory, marketplace, two_workflows, as_caller):
    first, second = two_workflows
    created = first.create_request(as_caller(marketplace.t1), marketplace.p1.id)

    holder = session_factory()
    try:
        RentalService(db=holder).add_agreement(
            tenant_id=marketplace.t3.id,
            property_id=marketplace.p3.id,
            start_date=date(2026, 1, 1),
            monthly_rent=Decimal("2100.00"),
        )
        with pytest.raises(StoreTimeoutError):
            second.approve_request(as_caller(marketplace.manager), created.request_id)
    finally:
        holder.rollback()
        holder.close()

    with session_factory() as db:
        assert db.get(RentalRequest, created.request_id).status is RentalRequestStatus.PENDING
