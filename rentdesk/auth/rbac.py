"""Role-based authorization helpers.

Role checks are declared as scopes per role; ownership checks that depend on
the row being accessed live in the ``ensure_*`` functions below. Both raise
``AuthorizationError`` and must run before any store mutation.
"""

from __future__ import annotations

from rentdesk.auth.caller import CurrentUser
from rentdesk.core.exceptions import AuthorizationError
from rentdesk.models.enums import UserRole

# Scope strings are kept explicit for endpoint-level declarations.
ROLE_SCOPES: dict[UserRole, set[str]] = {
    UserRole.TENANT: {
        "rental_requests.create",
        "rental_requests.read",
        "rentals.read_own",
        "notifications.read",
    },
    UserRole.OWNER: {
        "rental_requests.read",
        "rentals.read_owned",
        "notifications.read",
    },
    UserRole.MANAGER: {
        "rental_requests.read",
        "rental_requests.review",
        "rentals.create",
        "rentals.end",
        "rentals.read_all",
        "notifications.read",
    },
}


def get_scopes_for_role(role: UserRole | str) -> set[str]:
    """Return scopes granted to a role."""
    try:
        return ROLE_SCOPES.get(UserRole(role), set())
    except ValueError:
        return set()


def has_scopes(role: UserRole | str, required_scopes: list[str] | set[str] | tuple[str, ...]) -> bool:
    """Check if role includes every required scope."""
    return set(required_scopes).issubset(get_scopes_for_role(role))


def require_scopes(role: UserRole | str, required_scopes: list[str] | set[str] | tuple[str, ...]) -> None:
    """Raise when a role lacks required scopes."""
    if has_scopes(role=role, required_scopes=required_scopes):
        return
    missing = sorted(set(required_scopes) - get_scopes_for_role(role))
    raise AuthorizationError(f"Missing required scopes: {', '.join(missing)}")


def ensure_can_view_request(user: CurrentUser, tenant_id: int, owner_id: int) -> None:
    """A request is visible to its tenant, the property's owner, and any manager."""
    if user.is_manager:
        return
    if user.role is UserRole.TENANT and user.user_id == tenant_id:
        return
    if user.role is UserRole.OWNER and user.user_id == owner_id:
        return
    raise AuthorizationError("You are not authorized to view this request.")


def ensure_can_view_property_rentals(user: CurrentUser, owner_id: int) -> None:
    """Rental history and current tenancy are visible to managers and the owner."""
    if user.is_manager:
        return
    if user.role is UserRole.OWNER and user.user_id == owner_id:
        return
    raise AuthorizationError("You can only view rentals for your own properties.")
