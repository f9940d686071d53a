from __future__ import annotations

from datetime import date, datetime, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from rentdesk.models import RentalRequestStatus, UserRole
from rentdesk.services.rental_request_service import RentalRequestService


def test_second_pending_request_violates_partial_unique_index(session, marketplace):
    service = RentalRequestService(db=session)
    service.add_pending(marketplace.t1.id, marketplace.p1.id, date(2026, 3, 1))
    session.commit()

    with pytest.raises(IntegrityError):
        service.add_pending(marketplace.t1.id, marketplace.p1.id, date(2026, 3, 2))
    session.rollback()


def test_reviewed_request_frees_the_pending_slot(session, marketplace):
    service = RentalRequestService(db=session)
    first = service.add_pending(marketplace.t1.id, marketplace.p1.id, date(2026, 3, 1))
    assert service.mark_reviewed(
        first, RentalRequestStatus.REJECTED, marketplace.manager.id, datetime(2026, 3, 2, tzinfo=timezone.utc)
    )
    session.commit()

    second = service.add_pending(marketplace.t1.id, marketplace.p1.id, date(2026, 3, 3))
    session.commit()
    assert second.id != first.id
    assert service.find_pending(marketplace.t1.id, marketplace.p1.id).id == second.id


def test_mark_reviewed_only_moves_pending_rows(session, marketplace):
    service = RentalRequestService(db=session)
    request = service.add_pending(marketplace.t1.id, marketplace.p1.id, date(2026, 3, 1))
    reviewed_at = datetime(2026, 3, 2, tzinfo=timezone.utc)

    assert service.mark_reviewed(request, RentalRequestStatus.APPROVED, marketplace.manager.id, reviewed_at) is True
    assert request.status is RentalRequestStatus.APPROVED
    assert request.reviewed_by == marketplace.manager.id
    assert service.mark_reviewed(request, RentalRequestStatus.REJECTED, marketplace.manager.id, reviewed_at) is False
    session.commit()

    reloaded = service.get_request(request.id)
    assert reloaded.status is RentalRequestStatus.APPROVED
    assert reloaded.rejection_reason is None


def test_list_for_role_scopes_rows(session, marketplace):
    service = RentalRequestService(db=session)
    service.add_pending(marketplace.t1.id, marketplace.p1.id, date(2026, 3, 1))
    service.add_pending(marketplace.t2.id, marketplace.p3.id, date(2026, 3, 2))
    latest = service.add_pending(marketplace.t1.id, marketplace.p2.id, date(2026, 3, 3))
    session.commit()

    tenant_rows = service.list_for_role(marketplace.t1.id, UserRole.TENANT)
    assert [row.tenant_id for row in tenant_rows] == [marketplace.t1.id, marketplace.t1.id]
    assert tenant_rows[0].id == latest.id

    owner_rows = service.list_for_role(marketplace.owner.id, UserRole.OWNER)
    assert {row.property_id for row in owner_rows} == {marketplace.p1.id, marketplace.p2.id}

    assert len(service.list_for_role(marketplace.manager.id, UserRole.MANAGER)) == 3
