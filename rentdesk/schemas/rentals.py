"""Rental agreement request/response schemas."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from rentdesk.models import Rental


class AgreementSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    rental_id: int
    tenant_id: int
    property_id: int
    start_date: date
    monthly_rent: float
    commission: float | None = None


class RentalApproved(BaseModel):
    message: str = "Rental request approved and agreement created successfully"
    rental_agreement: AgreementSummaryResponse


class RentalCreate(BaseModel):
    tenant_id: int = Field(ge=1)
    property_id: int = Field(ge=1)
    start_date: date
    monthly_rent: float = Field(ge=0)
    commission: float | None = Field(default=None, ge=0)


class RentalEnd(BaseModel):
    tenant_id: int = Field(ge=1)
    property_id: int = Field(ge=1)
    start_date: date
    end_date: date


class PartySummary(BaseModel):
    id: int
    name: str
    username: str


class RentalResponse(BaseModel):
    rental_id: int
    tenant_id: int
    property_id: int
    start_date: date
    end_date: date | None = None
    monthly_rent: float
    commission: float | None = None
    locality: str | None = None
    address: str | None = None
    tenant: PartySummary | None = None
    owner: PartySummary | None = None

    @classmethod
    def from_model(cls, rental: Rental) -> "RentalResponse":
        listing = rental.listing
        tenant = rental.tenant
        owner = listing.owner if listing is not None else None
        return cls(
            rental_id=rental.id,
            tenant_id=rental.tenant_id,
            property_id=rental.property_id,
            start_date=rental.start_date,
            end_date=rental.end_date,
            monthly_rent=rental.monthly_rent,
            commission=rental.commission,
            locality=listing.locality if listing else None,
            address=listing.address if listing else None,
            tenant=PartySummary(id=tenant.id, name=tenant.full_name, username=tenant.username) if tenant else None,
            owner=PartySummary(id=owner.id, name=owner.full_name, username=owner.username) if owner else None,
        )


class RentalList(BaseModel):
    count: int
    rentals: list[RentalResponse]


class ActiveRental(BaseModel):
    active_rental: RentalResponse | None = None


class CurrentTenant(BaseModel):
    message: str | None = None
    tenant: PartySummary | None = None
