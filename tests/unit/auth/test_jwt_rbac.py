from __future__ import annotations

from datetime import timedelta

import pytest

from rentdesk.auth.caller import CurrentUser, from_claims
from rentdesk.auth.jwt import create_access_token, decode_jwt, encode_jwt
from rentdesk.auth.rbac import ensure_can_view_property_rentals, ensure_can_view_request, require_scopes
from rentdesk.core.exceptions import AuthenticationError, AuthorizationError
from rentdesk.models import UserRole


def test_jwt_roundtrip_contains_required_claims():
    token = create_access_token(user_id=10, role="manager", secret="test-secret")
    claims = decode_jwt(token, secret="test-secret")
    assert claims["sub"] == "10"
    assert claims["role"] == "manager"
    assert claims["token_use"] == "access"
    assert "exp" in claims
    assert "jti" in claims


def test_jwt_rejects_tampered_signature():
    token = create_access_token(user_id=10, role="tenant", secret="test-secret")
    with pytest.raises(AuthenticationError, match="signature"):
        decode_jwt(token, secret="other-secret")


def test_jwt_rejects_expired_token():
    token = encode_jwt({"sub": "1", "role": "tenant"}, secret="test-secret", ttl=timedelta(minutes=-5))
    with pytest.raises(AuthenticationError, match="expired"):
        decode_jwt(token, secret="test-secret")


def test_claims_map_to_caller_identity():
    user = from_claims({"sub": "7", "role": "OWNER", "token_use": "access"})
    assert user == CurrentUser(user_id=7, role=UserRole.OWNER)
    with pytest.raises(AuthenticationError):
        from_claims({"sub": "7", "role": "landlord"})
    with pytest.raises(AuthenticationError):
        from_claims({"sub": "7", "role": "tenant", "token_use": "refresh"})


def test_rbac_blocks_missing_scope():
    require_scopes(UserRole.TENANT, ["rental_requests.create"])
    require_scopes(UserRole.MANAGER, ["rental_requests.review", "rentals.end"])
    with pytest.raises(AuthorizationError, match="rental_requests.review"):
        require_scopes(UserRole.TENANT, ["rental_requests.review"])
    with pytest.raises(AuthorizationError):
        require_scopes(UserRole.OWNER, ["rental_requests.create"])
    with pytest.raises(AuthorizationError):
        require_scopes(UserRole.MANAGER, ["rental_requests.create"])


def test_request_visibility_by_role():
    ensure_can_view_request(CurrentUser(1, UserRole.TENANT), tenant_id=1, owner_id=5)
    ensure_can_view_request(CurrentUser(5, UserRole.OWNER), tenant_id=1, owner_id=5)
    ensure_can_view_request(CurrentUser(9, UserRole.MANAGER), tenant_id=1, owner_id=5)
    with pytest.raises(AuthorizationError):
        ensure_can_view_request(CurrentUser(2, UserRole.TENANT), tenant_id=1, owner_id=5)
    with pytest.raises(AuthorizationError):
        ensure_can_view_request(CurrentUser(6, UserRole.OWNER), tenant_id=1, owner_id=5)


def test_property_rental_visibility_excludes_tenants():
    ensure_can_view_property_rentals(CurrentUser(5, UserRole.OWNER), owner_id=5)
    with pytest.raises(AuthorizationError):
        ensure_can_view_property_rentals(CurrentUser(5, UserRole.TENANT), owner_id=5)
