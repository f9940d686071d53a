"""Persistence for rental requests.

Writes here only flush; the workflow engine owns the surrounding transaction.
The one-pending-request-per-(tenant, property) rule is backed by the partial
unique index ``uq_rental_requests_pending_tenant_property``.
"""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import select, update
from sqlalchemy.orm import joinedload
from sqlalchemy.orm.attributes import set_committed_value

from rentdesk.models import Property, RentalRequest, RentalRequestStatus, UserRole
from rentdesk.services.base_service import BaseService


class RentalRequestService(BaseService):
    """Service for rental request rows."""

    def _detailed(self):
        return select(RentalRequest).options(
            joinedload(RentalRequest.tenant),
            joinedload(RentalRequest.listing),
            joinedload(RentalRequest.reviewer),
        )

    def get_request(self, request_id: int) -> RentalRequest | None:
        return self.db.scalar(self._detailed().where(RentalRequest.id == request_id))

    def lock_request(self, request_id: int) -> RentalRequest | None:
        """Re-read the row under the current transaction, blocking concurrent reviewers."""
        stmt = (
            select(RentalRequest)
            .where(RentalRequest.id == request_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return self.db.scalar(stmt)

    def find_pending(self, tenant_id: int, property_id: int) -> RentalRequest | None:
        return self.db.scalar(
            select(RentalRequest).where(
                RentalRequest.tenant_id == tenant_id,
                RentalRequest.property_id == property_id,
                RentalRequest.status == RentalRequestStatus.PENDING,
            )
        )

    def add_pending(self, tenant_id: int, property_id: int, request_date: date) -> RentalRequest:
        request = RentalRequest(
            tenant_id=tenant_id,
            property_id=property_id,
            request_date=request_date,
            status=RentalRequestStatus.PENDING,
        )
        self.db.add(request)
        self.db.flush()
        return request

    def mark_reviewed(
        self,
        request: RentalRequest,
        status: RentalRequestStatus,
        reviewer_id: int,
        reviewed_at: datetime,
        rejection_reason: str | None = None,
    ) -> bool:
        """Move a pending request to ``status``; False when it is no longer pending."""
        result = self.db.execute(
            update(RentalRequest)
            .where(RentalRequest.id == request.id, RentalRequest.status == RentalRequestStatus.PENDING)
            .values(
                status=status,
                reviewed_by=reviewer_id,
                reviewed_at=reviewed_at,
                rejection_reason=rejection_reason,
                updated_at=reviewed_at,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return False
        for key, value in (
            ("status", status),
            ("reviewed_by", reviewer_id),
            ("reviewed_at", reviewed_at),
            ("rejection_reason", rejection_reason),
        ):
            set_committed_value(request, key, value)
        return True

    def list_for_role(self, user_id: int, role: UserRole) -> list[RentalRequest]:
        """Tenants see their own requests, owners those on their properties, managers all."""
        stmt = self._detailed()
        if role is UserRole.TENANT:
            stmt = stmt.where(RentalRequest.tenant_id == user_id)
        elif role is UserRole.OWNER:
            stmt = stmt.join(Property, Property.id == RentalRequest.property_id).where(Property.owner_id == user_id)
        stmt = stmt.order_by(RentalRequest.request_date.desc(), RentalRequest.id.desc())
        return list(self.db.scalars(stmt).unique())
