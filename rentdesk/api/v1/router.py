"""Root API router for v1 endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from rentdesk.api.v1 import health, notifications, rental_requests, rentals
from rentdesk.core.config import get_config

api_router = APIRouter(prefix=get_config().API_PREFIX)
api_router.include_router(health.router)
api_router.include_router(rental_requests.router)
api_router.include_router(rentals.router)
api_router.include_router(notifications.router)


def get_api_router() -> APIRouter:
    return api_router
