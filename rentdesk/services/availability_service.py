"""Answers whether a property currently has an open rental agreement."""

from __future__ import annotations

from sqlalchemy import exists, select

from rentdesk.models import Rental
from rentdesk.services.base_service import BaseService


class AvailabilityService(BaseService):
    """Side-effect free; safe to call inside or outside a workflow transaction."""

    def is_available(self, property_id: int) -> bool:
        occupied = self.db.scalar(
            select(exists().where(Rental.property_id == property_id, Rental.end_date.is_(None)))
        )
        return not occupied
