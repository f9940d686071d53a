"""Notification inbox endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header
from sqlalchemy.orm import Session

from rentdesk.api.v1._authz import authorize, http_error
from rentdesk.auth.rbac import require_scopes
from rentdesk.core.dependencies import get_db_session
from rentdesk.core.exceptions import RentDeskError
from rentdesk.schemas.common import APIEnvelope
from rentdesk.schemas.notifications import NotificationList, NotificationResponse
from rentdesk.services.notification_service import NotificationService

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=NotificationList)
def list_notifications(
    db: Session = Depends(get_db_session),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> NotificationList:
    try:
        user = authorize(authorization)
        require_scopes(user.role, ["notifications.read"])
        notifications = NotificationService(db).list_for_user(user.user_id)
    except RentDeskError as exc:
        raise http_error(exc) from exc
    items = [NotificationResponse.model_validate(item) for item in notifications]
    return NotificationList(count=len(items), notifications=items)


@router.put("/{notification_id}/read", response_model=APIEnvelope)
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db_session),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> APIEnvelope:
    try:
        user = authorize(authorization)
        NotificationService(db).mark_read(notification_id, user.user_id)
    except RentDeskError as exc:
        raise http_error(exc) from exc
    return APIEnvelope(message="Notification marked as read")
