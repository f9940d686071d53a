"""Rental request request/response schemas."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field

from rentdesk.models import RentalRequest
from rentdesk.schemas.common import PropertyDetails


class RentalRequestCreate(BaseModel):
    property_id: int = Field(ge=1)


class RentalRequestCreated(BaseModel):
    message: str = "Rental request created successfully"
    request_id: int
    property_available: bool


class RentalRequestApprove(BaseModel):
    commission: float | None = Field(default=None, ge=0)


class RentalRequestReject(BaseModel):
    reason: str | None = Field(default=None, max_length=2000)


class RentalRequestResponse(BaseModel):
    request_id: int
    tenant_id: int
    tenant_name: str | None = None
    property_id: int
    property_details: PropertyDetails | None = None
    request_date: date
    status: str
    reviewed_by: int | None = None
    reviewed_by_name: str | None = None
    reviewed_at: datetime | None = None
    rejection_reason: str | None = None

    @classmethod
    def from_model(cls, request: RentalRequest) -> "RentalRequestResponse":
        listing = request.listing
        return cls(
            request_id=request.id,
            tenant_id=request.tenant_id,
            tenant_name=request.tenant.full_name if request.tenant else None,
            property_id=request.property_id,
            property_details=(
                PropertyDetails(locality=listing.locality, address=listing.address, rent=listing.rent)
                if listing
                else None
            ),
            request_date=request.request_date,
            status=request.status.value,
            reviewed_by=request.reviewed_by,
            reviewed_by_name=request.reviewer.full_name if request.reviewer else None,
            reviewed_at=request.reviewed_at,
            rejection_reason=request.rejection_reason,
        )


class RentalRequestList(BaseModel):
    count: int
    requests: list[RentalRequestResponse]


class RentalRequestRejected(BaseModel):
    message: str = "Rental request rejected successfully"
    request_id: int
    rejection_reason: str | None = None
