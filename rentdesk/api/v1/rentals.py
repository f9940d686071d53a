"""Rental agreement endpoints for API v1."""

from __future__ import annotations

from decimal import Decimal

from fastapi import APIRouter, Depends, Header, status
from sqlalchemy.orm import Session

from rentdesk.api.v1._authz import authorize, http_error
from rentdesk.core.dependencies import get_db_session
from rentdesk.core.exceptions import RentDeskError
from rentdesk.schemas.common import APIEnvelope
from rentdesk.schemas.rentals import (
    ActiveRental,
    CurrentTenant,
    PartySummary,
    RentalCreate,
    RentalEnd,
    RentalList,
    RentalResponse,
)
from rentdesk.services.rental_query_service import RentalQueryService
from rentdesk.services.workflow_service import RentalWorkflowService

router = APIRouter(prefix="/rentals", tags=["rentals"])


def _as_list(rentals) -> RentalList:
    items = [RentalResponse.from_model(rental) for rental in rentals]
    return RentalList(count=len(items), rentals=items)


@router.post("", response_model=RentalResponse, status_code=status.HTTP_201_CREATED)
def create_rental(
    payload: RentalCreate,
    db: Session = Depends(get_db_session),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> RentalResponse:
    commission = Decimal(str(payload.commission)) if payload.commission is not None else None
    try:
        user = authorize(authorization)
        rental = RentalWorkflowService(db).create_agreement(
            user,
            tenant_id=payload.tenant_id,
            property_id=payload.property_id,
            start_date=payload.start_date,
            monthly_rent=Decimal(str(payload.monthly_rent)),
            commission=commission,
        )
    except RentDeskError as exc:
        raise http_error(exc) from exc
    return RentalResponse.from_model(rental)


@router.put("/end", response_model=APIEnvelope)
def end_rental(
    payload: RentalEnd,
    db: Session = Depends(get_db_session),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> APIEnvelope:
    try:
        user = authorize(authorization)
        RentalWorkflowService(db).end_agreement(
            user,
            tenant_id=payload.tenant_id,
            property_id=payload.property_id,
            start_date=payload.start_date,
            end_date=payload.end_date,
        )
    except RentDeskError as exc:
        raise http_error(exc) from exc
    return APIEnvelope(message="Rental agreement ended successfully")


@router.get("", response_model=RentalList)
def list_active_rentals(
    db: Session = Depends(get_db_session),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> RentalList:
    try:
        user = authorize(authorization)
        rentals = RentalQueryService(db).all_active_rentals(user)
    except RentDeskError as exc:
        raise http_error(exc) from exc
    return _as_list(rentals)


@router.get("/history/{property_id}", response_model=RentalList)
def rental_history(
    property_id: int,
    db: Session = Depends(get_db_session),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> RentalList:
    try:
        user = authorize(authorization)
        rentals = RentalQueryService(db).rental_history(user, property_id)
    except RentDeskError as exc:
        raise http_error(exc) from exc
    return _as_list(rentals)


@router.get("/tenant/{property_id}", response_model=CurrentTenant)
def current_tenant(
    property_id: int,
    db: Session = Depends(get_db_session),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> CurrentTenant:
    try:
        user = authorize(authorization)
        rental = RentalQueryService(db).current_rental(user, property_id)
    except RentDeskError as exc:
        raise http_error(exc) from exc
    if rental is None:
        return CurrentTenant(message="No current tenant for this property")
    tenant = rental.tenant
    return CurrentTenant(tenant=PartySummary(id=tenant.id, name=tenant.full_name, username=tenant.username))


@router.get("/tenant-active", response_model=ActiveRental)
def tenant_active_rental(
    db: Session = Depends(get_db_session),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> ActiveRental:
    try:
        user = authorize(authorization)
        rental = RentalQueryService(db).tenant_active_rental(user)
    except RentDeskError as exc:
        raise http_error(exc) from exc
    return ActiveRental(active_rental=RentalResponse.from_model(rental) if rental else None)


@router.get("/owner-active", response_model=RentalList)
def owner_active_rentals(
    db: Session = Depends(get_db_session),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> RentalList:
    try:
        user = authorize(authorization)
        rentals = RentalQueryService(db).owner_active_rentals(user)
    except RentDeskError as exc:
        raise http_error(exc) from exc
    return _as_list(rentals)
