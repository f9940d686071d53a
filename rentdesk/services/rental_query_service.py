"""Role-aware read models for requests and rentals, gated by role and ownership."""

from __future__ import annotations

from sqlalchemy.orm import Session

from rentdesk.auth.caller import CurrentUser
from rentdesk.auth.rbac import ensure_can_view_property_rentals, ensure_can_view_request, require_scopes
from rentdesk.core.exceptions import NotFoundError
from rentdesk.models import Rental, RentalRequest
from rentdesk.services.base_service import BaseService
from rentdesk.services.property_service import PropertyService
from rentdesk.services.rental_request_service import RentalRequestService
from rentdesk.services.rental_service import RentalService


class RentalQueryService(BaseService):
    def __init__(self, db: Session | None = None) -> None:
        super().__init__(db)
        self.requests = RentalRequestService(self.db)
        self.rentals = RentalService(self.db)
        self.properties = PropertyService(self.db)

    def list_requests(self, user: CurrentUser) -> list[RentalRequest]:
        require_scopes(user.role, ["rental_requests.read"])
        return self.requests.list_for_role(user.user_id, user.role)

    def get_request(self, user: CurrentUser, request_id: int) -> RentalRequest:
        request = self.requests.get_request(request_id)
        if request is None:
            raise NotFoundError(f"Rental request {request_id} not found.")
        ensure_can_view_request(user, tenant_id=request.tenant_id, owner_id=request.listing.owner_id)
        return request

    def rental_history(self, user: CurrentUser, property_id: int) -> list[Rental]:
        prop = self.properties.get_property(property_id)
        ensure_can_view_property_rentals(user, owner_id=prop.owner_id)
        return self.rentals.history_for_property(property_id)

    def current_rental(self, user: CurrentUser, property_id: int) -> Rental | None:
        prop = self.properties.get_property(property_id)
        ensure_can_view_property_rentals(user, owner_id=prop.owner_id)
        return self.rentals.get_open_for_property(property_id)

    def tenant_active_rental(self, user: CurrentUser) -> Rental | None:
        require_scopes(user.role, ["rentals.read_own"])
        return self.rentals.active_for_tenant(user.user_id)

    def owner_active_rentals(self, user: CurrentUser) -> list[Rental]:
        require_scopes(user.role, ["rentals.read_owned"])
        return self.rentals.active_for_owner(user.user_id)

    def all_active_rentals(self, user: CurrentUser) -> list[Rental]:
        require_scopes(user.role, ["rentals.read_all"])
        return self.rentals.list_active()
