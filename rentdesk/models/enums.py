"""Canonical enum values for the rental schema."""

from __future__ import annotations

import enum


class UserRole(str, enum.Enum):
    TENANT = "tenant"
    OWNER = "owner"
    MANAGER = "manager"


class RentalRequestStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class AgreementState(str, enum.Enum):
    """Derived state of a rental agreement; not persisted, ``end_date`` is authoritative."""

    OPEN = "open"
    CLOSED = "closed"
