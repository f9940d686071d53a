from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from rentdesk.core.exceptions import AuthorizationError, NotFoundError
from rentdesk.services.rental_query_service import RentalQueryService
from rentdesk.services.workflow_service import RentalWorkflowService


@pytest.fixture
def occupied(session, marketplace, as_caller):
    """p1 rented to t1 through the request flow, p3 rented to t3 directly, t2 waiting on p2."""
    workflow = RentalWorkflowService(
        db=session, clock=lambda: datetime(2026, 3, 2, tzinfo=timezone.utc), reject_when_occupied=False
    )
    manager = as_caller(marketplace.manager)
    created = workflow.create_request(as_caller(marketplace.t1), marketplace.p1.id)
    workflow.approve_request(manager, created.request_id)
    waiting = workflow.create_request(as_caller(marketplace.t2), marketplace.p2.id)
    workflow.create_agreement(
        manager,
        tenant_id=marketplace.t3.id,
        property_id=marketplace.p3.id,
        start_date=date(2026, 1, 1),
        monthly_rent=Decimal("2100.00"),
    )
    return waiting


def test_requests_are_scoped_by_role(session, marketplace, occupied, as_caller):
    queries = RentalQueryService(db=session)

    assert [r.tenant_id for r in queries.list_requests(as_caller(marketplace.t2))] == [marketplace.t2.id]
    assert len(queries.list_requests(as_caller(marketplace.owner))) == 2
    assert queries.list_requests(as_caller(marketplace.other_owner)) == []
    assert len(queries.list_requests(as_caller(marketplace.manager))) == 2


def test_single_request_visibility(session, marketplace, occupied, as_caller):
    queries = RentalQueryService(db=session)

    assert queries.get_request(as_caller(marketplace.t2), occupied.request_id).property_id == marketplace.p2.id
    assert queries.get_request(as_caller(marketplace.owner), occupied.request_id).tenant_id == marketplace.t2.id
    with pytest.raises(AuthorizationError):
        queries.get_request(as_caller(marketplace.t1), occupied.request_id)
    with pytest.raises(AuthorizationError):
        queries.get_request(as_caller(marketplace.other_owner), occupied.request_id)
    with pytest.raises(NotFoundError):
        queries.get_request(as_caller(marketplace.manager), 9999)


def test_property_rental_views(session, marketplace, occupied, as_caller):
    queries = RentalQueryService(db=session)
    owner = as_caller(marketplace.owner)

    assert [r.tenant_id for r in queries.rental_history(owner, marketplace.p1.id)] == [marketplace.t1.id]
    assert queries.current_rental(owner, marketplace.p1.id).tenant.username == "tara"
    assert queries.current_rental(owner, marketplace.p2.id) is None
    with pytest.raises(AuthorizationError):
        queries.rental_history(owner, marketplace.p3.id)
    with pytest.raises(AuthorizationError):
        queries.current_rental(as_caller(marketplace.t1), marketplace.p1.id)
    with pytest.raises(NotFoundError):
        queries.rental_history(as_caller(marketplace.manager), 9999)


def test_active_rental_views(session, marketplace, occupied, as_caller):
    queries = RentalQueryService(db=session)

    assert queries.tenant_active_rental(as_caller(marketplace.t1)).property_id == marketplace.p1.id
    assert queries.tenant_active_rental(as_caller(marketplace.t2)) is None
    assert [r.property_id for r in queries.owner_active_rentals(as_caller(marketplace.owner))] == [marketplace.p1.id]
    assert len(queries.all_active_rentals(as_caller(marketplace.manager))) == 2

    with pytest.raises(AuthorizationError):
        queries.tenant_active_rental(as_caller(marketplace.owner))
    with pytest.raises(AuthorizationError):
        queries.owner_active_rentals(as_caller(marketplace.t1))
    with pytest.raises(AuthorizationError):
        queries.all_active_rentals(as_caller(marketplace.owner))
