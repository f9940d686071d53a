"""Caller identity extracted from verified token claims."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from rentdesk.core.exceptions import AuthenticationError
from rentdesk.models.enums import UserRole


@dataclass(frozen=True)
class CurrentUser:
    user_id: int
    role: UserRole

    @property
    def is_manager(self) -> bool:
        return self.role is UserRole.MANAGER


def from_claims(claims: dict[str, Any]) -> CurrentUser:
    """Build the caller identity from JWT claims."""
    if claims.get("token_use", "access") != "access":
        raise AuthenticationError("Token is not an access token.")
    try:
        user_id = int(claims["sub"])
        role = UserRole(str(claims["role"]).lower())
    except (KeyError, TypeError, ValueError) as exc:
        raise AuthenticationError("Token claims are missing user or role context.") from exc
    return CurrentUser(user_id=user_id, role=role)
