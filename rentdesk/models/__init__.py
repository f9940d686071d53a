"""SQLAlchemy model package for the rental marketplace schema."""

from rentdesk.models.base import Base
from rentdesk.models.enums import AgreementState, RentalRequestStatus, UserRole
from rentdesk.models.notification import Notification
from rentdesk.models.property import Property
from rentdesk.models.rental import Rental
from rentdesk.models.rental_request import RentalRequest
from rentdesk.models.user import User

__all__ = [
    "AgreementState",
    "Base",
    "Notification",
    "Property",
    "Rental",
    "RentalRequest",
    "RentalRequestStatus",
    "User",
    "UserRole",
]
