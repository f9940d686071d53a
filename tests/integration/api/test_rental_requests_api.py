from __future__ import annotations

import pytest
from fastapi import HTTPException

from rentdesk.api.v1 import notifications, rental_requests, rentals
from rentdesk.auth.jwt import create_access_token
from rentdesk.core.config import get_config
from rentdesk.schemas import RentalEnd, RentalRequestApprove, RentalRequestCreate, RentalRequestReject


@pytest.fixture
def bearer():
    def _bearer(user) -> str:
        token = create_access_token(user_id=user.id, role=user.role.value, secret=get_config().JWT_SECRET)
        return f"Bearer {token}"

    return _bearer


def test_endpoints_require_auth(session):
    with pytest.raises(HTTPException) as exc:
        rental_requests.list_rental_requests(db=session, authorization=None)
    assert exc.value.status_code == 401

    with pytest.raises(HTTPException) as exc:
        rental_requests.list_rental_requests(db=session, authorization="Token abc")
    assert exc.value.status_code == 401


def test_request_review_flow_over_endpoints(session, marketplace, bearer):
    created = rental_requests.create_rental_request(
        RentalRequestCreate(property_id=marketplace.p1.id), db=session, authorization=bearer(marketplace.t1)
    )
    assert created.property_available is True

    with pytest.raises(HTTPException) as exc:
        rental_requests.create_rental_request(
            RentalRequestCreate(property_id=marketplace.p1.id), db=session, authorization=bearer(marketplace.t1)
        )
    assert exc.value.status_code == 409
    assert exc.value.detail["error_code"] == "conflict"

    with pytest.raises(HTTPException) as exc:
        rental_requests.approve_rental_request(
            created.request_id, payload=None, db=session, authorization=bearer(marketplace.t1)
        )
    assert exc.value.status_code == 403

    approved = rental_requests.approve_rental_request(
        created.request_id,
        payload=RentalRequestApprove(commission=120.5),
        db=session,
        authorization=bearer(marketplace.manager),
    )
    assert approved.rental_agreement.tenant_id == marketplace.t1.id
    assert approved.rental_agreement.monthly_rent == 1450.0
    assert approved.rental_agreement.commission == 120.5

    listed = rental_requests.list_rental_requests(db=session, authorization=bearer(marketplace.owner))
    assert listed.count == 1
    assert listed.requests[0].status == "approved"
    assert listed.requests[0].property_details.locality == "Riverside"

    active = rentals.tenant_active_rental(db=session, authorization=bearer(marketplace.t1))
    assert active.active_rental.property_id == marketplace.p1.id

    ended = rentals.end_rental(
        RentalEnd(
            tenant_id=marketplace.t1.id,
            property_id=marketplace.p1.id,
            start_date=active.active_rental.start_date,
            end_date=active.active_rental.start_date,
        ),
        db=session,
        authorization=bearer(marketplace.manager),
    )
    assert ended.status == "ok"

    current = rentals.current_tenant(marketplace.p1.id, db=session, authorization=bearer(marketplace.owner))
    assert current.tenant is None


def test_reject_and_inbox_endpoints(session, marketplace, bearer):
    created = rental_requests.create_rental_request(
        RentalRequestCreate(property_id=marketplace.p2.id), db=session, authorization=bearer(marketplace.t2)
    )
    rejected = rental_requests.reject_rental_request(
        created.request_id,
        payload=RentalRequestReject(reason="too noisy"),
        db=session,
        authorization=bearer(marketplace.manager),
    )
    assert rejected.rejection_reason == "too noisy"

    with pytest.raises(HTTPException) as exc:
        rental_requests.get_rental_request(created.request_id, db=session, authorization=bearer(marketplace.t1))
    assert exc.value.status_code == 403

    with pytest.raises(HTTPException) as exc:
        rental_requests.get_rental_request(9999, db=session, authorization=bearer(marketplace.manager))
    assert exc.value.status_code == 404

    inbox = notifications.list_notifications(db=session, authorization=bearer(marketplace.t2))
    assert inbox.count == 1
    assert "too noisy" in inbox.notifications[0].message

    notifications.mark_notification_read(inbox.notifications[0].id, db=session, authorization=bearer(marketplace.t2))
    session.expire_all()
    inbox = notifications.list_notifications(db=session, authorization=bearer(marketplace.t2))
    assert inbox.notifications[0].is_read is True

    with pytest.raises(HTTPException) as exc:
        notifications.mark_notification_read(
            inbox.notifications[0].id, db=session, authorization=bearer(marketplace.t1)
        )
    assert exc.value.status_code == 404
