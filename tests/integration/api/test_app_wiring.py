from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from rentdesk.auth.jwt import create_access_token
from rentdesk.core.config import get_config
from rentdesk.core.dependencies import get_db_session
from rentdesk.main import create_app


@pytest.fixture
def client(session_factory):
    app = create_app()

    def _override_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db_session] = _override_db
    with TestClient(app) as test_client:
        yield test_client


def _headers(user) -> dict[str, str]:
    token = create_access_token(user_id=user.id, role=user.role.value, secret=get_config().JWT_SECRET)
    return {"Authorization": f"Bearer {token}"}


def test_health_and_root(client):
    prefix = get_config().API_PREFIX
    assert client.get(f"{prefix}/health").json()["status"] == "ok"
    assert client.get("/").json()["api_prefix"] == prefix


def test_create_and_approve_over_http(client, marketplace):
    prefix = get_config().API_PREFIX

    response = client.post(
        f"{prefix}/rental-requests", json={"property_id": marketplace.p1.id}, headers=_headers(marketplace.t1)
    )
    assert response.status_code == 201
    request_id = response.json()["request_id"]

    duplicate = client.post(
        f"{prefix}/rental-requests", json={"property_id": marketplace.p1.id}, headers=_headers(marketplace.t1)
    )
    assert duplicate.status_code == 409
    assert duplicate.json()["detail"]["error_code"] == "conflict"

    approved = client.put(f"{prefix}/rental-requests/{request_id}/approve", headers=_headers(marketplace.manager))
    assert approved.status_code == 200
    assert approved.json()["rental_agreement"]["property_id"] == marketplace.p1.id

    again = client.put(f"{prefix}/rental-requests/{request_id}/approve", headers=_headers(marketplace.manager))
    assert again.status_code == 409

    rentals = client.get(f"{prefix}/rentals", headers=_headers(marketplace.manager)).json()
    assert rentals["count"] == 1
    assert rentals["rentals"][0]["tenant"]["username"] == "tara"


def test_unauthenticated_and_forbidden(client, marketplace):
    prefix = get_config().API_PREFIX
    assert client.get(f"{prefix}/rental-requests").status_code == 401
    forbidden = client.get(f"{prefix}/rentals/owner-active", headers=_headers(marketplace.t1))
    assert forbidden.status_code == 403
