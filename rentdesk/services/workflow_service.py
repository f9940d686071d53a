"""Rental request lifecycle and agreement-creation workflow.

This is the only writer of ``rental_requests`` and ``rentals``. Each public
operation:

1. checks the caller's role before touching the store,
2. runs every mutation inside one ``transaction()`` scope, re-reading the
   rows it depends on and re-checking invariants right before writing,
3. relies on the partial unique indexes as the last line of defense; a
   constraint violation at flush or commit surfaces as ``ConflictError``,
4. emits notifications. Approval records them inside its transaction;
   everything else notifies after commit and never fails because of it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy.orm import Session

from rentdesk.auth.caller import CurrentUser
from rentdesk.auth.rbac import require_scopes
from rentdesk.core.config import get_config
from rentdesk.core.exceptions import ConflictError, NotFoundError, ValidationError
from rentdesk.models import AgreementState, Rental, RentalRequest, RentalRequestStatus, UserRole
from rentdesk.models.base import utcnow
from rentdesk.orchestration.state_machine import AGREEMENT_LIFECYCLE, REQUEST_LIFECYCLE
from rentdesk.services.availability_service import AvailabilityService
from rentdesk.services.base_service import BaseService
from rentdesk.services.notification_service import NotificationEvent, NotificationService
from rentdesk.services.property_service import PropertyService
from rentdesk.services.rental_request_service import RentalRequestService
from rentdesk.services.rental_service import RentalService
from rentdesk.services.user_service import UserService

logger = logging.getLogger(__name__)

DUPLICATE_PENDING_MESSAGE = "You already have a pending request for this property."
PROPERTY_RENTED_MESSAGE = "This property is currently rented."
ALREADY_REVIEWED_MESSAGE = "Request does not exist or is not pending."


@dataclass(frozen=True)
class RequestCreated:
    request_id: int
    property_available: bool


@dataclass(frozen=True)
class AgreementSummary:
    rental_id: int
    tenant_id: int
    property_id: int
    start_date: date
    monthly_rent: Decimal
    commission: Decimal | None = None


class RentalWorkflowService(BaseService):
    """Workflow engine over the request and agreement stores."""

    def __init__(
        self,
        db: Session | None = None,
        notifier: NotificationService | None = None,
        clock: Callable[[], datetime] = utcnow,
        reject_when_occupied: bool | None = None,
    ) -> None:
        super().__init__(db)
        self.requests = RentalRequestService(self.db)
        self.rentals = RentalService(self.db)
        self.availability = AvailabilityService(self.db)
        self.properties = PropertyService(self.db)
        self.users = UserService(self.db)
        self.notifier = notifier or NotificationService(self.db)
        self.clock = clock
        if reject_when_occupied is None:
            reject_when_occupied = get_config().REQUEST_REQUIRES_AVAILABILITY
        self.reject_when_occupied = reject_when_occupied

    def _today(self) -> date:
        return self.clock().date()

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    def create_request(self, user: CurrentUser, property_id: int) -> RequestCreated:
        """Open a pending request for ``property_id`` on behalf of the calling tenant.

        Availability is informational by default: a request for a rented
        property is accepted and reported with ``property_available=False``;
        approval will refuse it while the tenancy is open.
        """
        require_scopes(user.role, ["rental_requests.create"])

        with self.transaction(conflict_message=DUPLICATE_PENDING_MESSAGE):
            tenant = self.users.require_user(user.user_id, role=UserRole.TENANT)
            prop = self.properties.get_property(property_id)
            available = self.availability.is_available(property_id)
            if not available and self.reject_when_occupied:
                raise ConflictError(PROPERTY_RENTED_MESSAGE)
            if self.requests.find_pending(tenant.id, property_id) is not None:
                raise ConflictError(DUPLICATE_PENDING_MESSAGE)
            request = self.requests.add_pending(tenant.id, property_id, self._today())

        logger.info(
            "rental_request.created",
            extra={
                "event": "rental_request.created",
                "request_id": request.id,
                "tenant_id": tenant.id,
                "property_id": property_id,
                "property_available": available,
            },
        )
        self.notifier.notify_role(
            UserRole.MANAGER,
            "New Rental Request",
            f"Tenant {tenant.full_name} (@{tenant.username}) requested rental for property: {prop.label}",
        )
        return RequestCreated(request_id=request.id, property_available=available)

    def approve_request(
        self,
        user: CurrentUser,
        request_id: int,
        commission: Decimal | None = None,
    ) -> AgreementSummary:
        """Approve a pending request and create its rental agreement atomically.

        The agreement, the status change and both notification rows commit
        together or not at all. The rent is the property's listed rent at
        approval time.
        """
        require_scopes(user.role, ["rental_requests.review"])
        events: list[NotificationEvent] = []

        with self.transaction(conflict_message=PROPERTY_RENTED_MESSAGE):
            request = self.requests.lock_request(request_id)
            if request is None:
                raise NotFoundError(f"Rental request {request_id} not found.")
            REQUEST_LIFECYCLE.assert_transition(request.status, RentalRequestStatus.APPROVED)

            prop = self.properties.get_property(request.property_id)
            if not self.availability.is_available(prop.id):
                raise ConflictError(PROPERTY_RENTED_MESSAGE)

            now = self.clock()
            rental = self.rentals.add_agreement(
                tenant_id=request.tenant_id,
                property_id=request.property_id,
                start_date=now.date(),
                monthly_rent=prop.rent,
                commission=commission,
            )
            if not self.requests.mark_reviewed(request, RentalRequestStatus.APPROVED, user.user_id, now):
                raise ConflictError(ALREADY_REVIEWED_MESSAGE)

            events = [
                NotificationEvent(
                    recipient_id=request.tenant_id,
                    title="Rental Request Approved",
                    message=(
                        f'Your rental request for property "{prop.label}" has been approved. '
                        "A rental agreement has been created."
                    ),
                ),
                NotificationEvent(
                    recipient_id=prop.owner_id,
                    title="Property Rented",
                    message=f'Your property "{prop.label}" has been rented out.',
                ),
            ]
            for event in events:
                self.notifier.record(event)

        logger.info(
            "rental_request.approved",
            extra={
                "event": "rental_request.approved",
                "request_id": request_id,
                "rental_id": rental.id,
                "manager_id": user.user_id,
                "property_id": rental.property_id,
            },
        )
        self.notifier.deliver(events)
        return AgreementSummary(
            rental_id=rental.id,
            tenant_id=rental.tenant_id,
            property_id=rental.property_id,
            start_date=rental.start_date,
            monthly_rent=rental.monthly_rent,
            commission=rental.commission,
        )

    def reject_request(self, user: CurrentUser, request_id: int, reason: str | None = None) -> RentalRequest:
        """Reject a pending request. No agreement is touched."""
        require_scopes(user.role, ["rental_requests.review"])
        reason = reason if reason and reason.strip() else None

        with self.transaction(conflict_message=ALREADY_REVIEWED_MESSAGE):
            request = self.requests.lock_request(request_id)
            if request is None:
                raise NotFoundError(f"Rental request {request_id} not found.")
            REQUEST_LIFECYCLE.assert_transition(request.status, RentalRequestStatus.REJECTED)
            if not self.requests.mark_reviewed(
                request, RentalRequestStatus.REJECTED, user.user_id, self.clock(), rejection_reason=reason
            ):
                raise ConflictError(ALREADY_REVIEWED_MESSAGE)
            prop = self.properties.get_property(request.property_id)

        logger.info(
            "rental_request.rejected",
            extra={"event": "rental_request.rejected", "request_id": request_id, "manager_id": user.user_id},
        )
        message = f'Your rental request for property "{prop.label}" has been rejected.'
        if reason:
            message = f"{message} Reason: {reason}"
        self.notifier.notify(request.tenant_id, "Rental Request Rejected", message)
        return request

    # ------------------------------------------------------------------
    # Agreements
    # ------------------------------------------------------------------

    def create_agreement(
        self,
        user: CurrentUser,
        tenant_id: int,
        property_id: int,
        start_date: date,
        monthly_rent: Decimal,
        commission: Decimal | None = None,
    ) -> Rental:
        """Create an agreement directly, bypassing the request flow."""
        require_scopes(user.role, ["rentals.create"])
        if monthly_rent < 0 or (commission is not None and commission < 0):
            raise ValidationError("Monthly rent and commission must not be negative.")

        with self.transaction(conflict_message=PROPERTY_RENTED_MESSAGE):
            self.users.require_user(tenant_id, role=UserRole.TENANT)
            prop = self.properties.get_property(property_id)
            if not self.availability.is_available(property_id):
                raise ConflictError(PROPERTY_RENTED_MESSAGE)
            rental = self.rentals.add_agreement(
                tenant_id=tenant_id,
                property_id=property_id,
                start_date=start_date,
                monthly_rent=monthly_rent,
                commission=commission,
            )

        logger.info(
            "rental.created",
            extra={"event": "rental.created", "rental_id": rental.id, "manager_id": user.user_id},
        )
        self.notifier.notify(
            tenant_id,
            "Rental Agreement Created",
            f'A rental agreement has been created for property "{prop.label}" starting from {start_date.isoformat()}.',
        )
        return rental

    def end_agreement(
        self,
        user: CurrentUser,
        tenant_id: int,
        property_id: int,
        start_date: date,
        end_date: date,
    ) -> Rental:
        """Close the agreement identified by (tenant, property, start date).

        Closing an already-closed agreement is a ``ConflictError``, not a no-op.
        """
        require_scopes(user.role, ["rentals.end"])
        if end_date < start_date:
            raise ValidationError("End date must not be before the start date.")

        with self.transaction(conflict_message="Rental agreement is already closed."):
            rental = self.rentals.find_agreement(tenant_id, property_id, start_date, lock=True)
            if rental is None:
                raise NotFoundError("No rental agreement matches this tenant, property and start date.")
            AGREEMENT_LIFECYCLE.assert_transition(rental.state, AgreementState.CLOSED)
            if not self.rentals.close_agreement(rental, end_date):
                raise ConflictError("Rental agreement is already closed.")
            prop = self.properties.get_property(property_id)

        logger.info(
            "rental.ended",
            extra={"event": "rental.ended", "rental_id": rental.id, "end_date": end_date, "manager_id": user.user_id},
        )
        ended = end_date.isoformat()
        self.notifier.notify_all(
            [
                NotificationEvent(
                    recipient_id=tenant_id,
                    title="Rental Agreement Ended",
                    message=f'Your rental agreement for property "{prop.label}" has ended on {ended}.',
                ),
                NotificationEvent(
                    recipient_id=prop.owner_id,
                    title="Rental Ended",
                    message=f'The rental for your property "{prop.label}" has ended on {ended}.',
                ),
            ]
        )
        return rental
