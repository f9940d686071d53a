"""Pydantic schema package for API contracts."""

from rentdesk.schemas.common import APIEnvelope, ErrorDetail, PropertyDetails
from rentdesk.schemas.notifications import NotificationList, NotificationResponse
from rentdesk.schemas.rental_requests import (
    RentalRequestApprove,
    RentalRequestCreate,
    RentalRequestCreated,
    RentalRequestList,
    RentalRequestReject,
    RentalRequestRejected,
    RentalRequestResponse,
)
from rentdesk.schemas.rentals import (
    ActiveRental,
    AgreementSummaryResponse,
    CurrentTenant,
    PartySummary,
    RentalApproved,
    RentalCreate,
    RentalEnd,
    RentalList,
    RentalResponse,
)

__all__ = [
    "APIEnvelope",
    "ActiveRental",
    "AgreementSummaryResponse",
    "CurrentTenant",
    "ErrorDetail",
    "NotificationList",
    "NotificationResponse",
    "PartySummary",
    "PropertyDetails",
    "RentalApproved",
    "RentalCreate",
    "RentalEnd",
    "RentalList",
    "RentalRequestApprove",
    "RentalRequestCreate",
    "RentalRequestCreated",
    "RentalRequestList",
    "RentalRequestReject",
    "RentalRequestRejected",
    "RentalRequestResponse",
    "RentalResponse",
]
