"""Rental request endpoints for API v1."""

from __future__ import annotations

from decimal import Decimal

from fastapi import APIRouter, Depends, Header, status
from sqlalchemy.orm import Session

from rentdesk.api.v1._authz import authorize, http_error
from rentdesk.core.dependencies import get_db_session
from rentdesk.core.exceptions import RentDeskError
from rentdesk.schemas.rental_requests import (
    RentalRequestApprove,
    RentalRequestCreate,
    RentalRequestCreated,
    RentalRequestList,
    RentalRequestReject,
    RentalRequestRejected,
    RentalRequestResponse,
)
from rentdesk.schemas.rentals import AgreementSummaryResponse, RentalApproved
from rentdesk.services.rental_query_service import RentalQueryService
from rentdesk.services.workflow_service import RentalWorkflowService

router = APIRouter(prefix="/rental-requests", tags=["rental-requests"])


@router.post("", response_model=RentalRequestCreated, status_code=status.HTTP_201_CREATED)
def create_rental_request(
    payload: RentalRequestCreate,
    db: Session = Depends(get_db_session),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> RentalRequestCreated:
    try:
        user = authorize(authorization)
        created = RentalWorkflowService(db).create_request(user, payload.property_id)
    except RentDeskError as exc:
        raise http_error(exc) from exc
    return RentalRequestCreated(request_id=created.request_id, property_available=created.property_available)


@router.get("", response_model=RentalRequestList)
def list_rental_requests(
    db: Session = Depends(get_db_session),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> RentalRequestList:
    try:
        user = authorize(authorization)
        requests = RentalQueryService(db).list_requests(user)
    except RentDeskError as exc:
        raise http_error(exc) from exc
    items = [RentalRequestResponse.from_model(request) for request in requests]
    return RentalRequestList(count=len(items), requests=items)


@router.get("/{request_id}", response_model=RentalRequestResponse)
def get_rental_request(
    request_id: int,
    db: Session = Depends(get_db_session),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> RentalRequestResponse:
    try:
        user = authorize(authorization)
        request = RentalQueryService(db).get_request(user, request_id)
    except RentDeskError as exc:
        raise http_error(exc) from exc
    return RentalRequestResponse.from_model(request)


@router.put("/{request_id}/approve", response_model=RentalApproved)
def approve_rental_request(
    request_id: int,
    payload: RentalRequestApprove | None = None,
    db: Session = Depends(get_db_session),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> RentalApproved:
    commission = None
    if payload is not None and payload.commission is not None:
        commission = Decimal(str(payload.commission))
    try:
        user = authorize(authorization)
        summary = RentalWorkflowService(db).approve_request(user, request_id, commission=commission)
    except RentDeskError as exc:
        raise http_error(exc) from exc
    return RentalApproved(rental_agreement=AgreementSummaryResponse.model_validate(summary))


@router.put("/{request_id}/reject", response_model=RentalRequestRejected)
def reject_rental_request(
    request_id: int,
    payload: RentalRequestReject | None = None,
    db: Session = Depends(get_db_session),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> RentalRequestRejected:
    reason = payload.reason if payload is not None else None
    try:
        user = authorize(authorization)
        request = RentalWorkflowService(db).reject_request(user, request_id, reason=reason)
    except RentDeskError as exc:
        raise http_error(exc) from exc
    return RentalRequestRejected(request_id=request.id, rejection_reason=request.rejection_reason)
