"""Shared authentication and error mapping for API v1 route modules."""

from __future__ import annotations

from fastapi import HTTPException, status

from rentdesk.auth.caller import CurrentUser
from rentdesk.core.config import get_config
from rentdesk.core.dependencies import get_current_user
from rentdesk.core.exceptions import AuthenticationError, RentDeskError
from rentdesk.schemas.common import ErrorDetail

_STATUS_BY_KIND: dict[str, int] = {
    "not_found": status.HTTP_404_NOT_FOUND,
    "conflict": status.HTTP_409_CONFLICT,
    "authorization": status.HTTP_403_FORBIDDEN,
    "authentication": status.HTTP_401_UNAUTHORIZED,
    "validation": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "timeout": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "internal": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _extract_bearer_token(authorization: str | None) -> str:
    if authorization is None or not authorization.strip():
        raise AuthenticationError("Authorization header is required.")
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise AuthenticationError("Authorization header must use Bearer token.")
    return parts[1].strip()


def authorize(authorization: str | None) -> CurrentUser:
    token = _extract_bearer_token(authorization)
    return get_current_user(token=token, settings=get_config())


def map_error(exc: RentDeskError) -> tuple[int, dict[str, str]]:
    code = _STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    return code, ErrorDetail(error_code=exc.kind, message=str(exc)).model_dump()


def http_error(exc: RentDeskError) -> HTTPException:
    code, detail = map_error(exc)
    return HTTPException(status_code=code, detail=detail)
