"""Persistence for rental agreements.

The one-open-agreement-per-property rule is backed by the partial unique
index ``uq_rentals_open_property``; the workflow's availability re-check is
only the fast path in front of it.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import select, update
from sqlalchemy.orm import joinedload
from sqlalchemy.orm.attributes import set_committed_value

from rentdesk.models import Property, Rental
from rentdesk.services.base_service import BaseService


class RentalService(BaseService):
    """Service for rental agreement rows."""

    def _detailed(self):
        return select(Rental).options(
            joinedload(Rental.tenant),
            joinedload(Rental.listing).joinedload(Property.owner),
        )

    def get_open_for_property(self, property_id: int) -> Rental | None:
        return self.db.scalar(
            self._detailed().where(Rental.property_id == property_id, Rental.end_date.is_(None))
        )

    def find_agreement(self, tenant_id: int, property_id: int, start_date: date, lock: bool = False) -> Rental | None:
        """Agreement for (tenant, property, start date); the open one wins over closed same-day ones."""
        stmt = (
            select(Rental)
            .where(
                Rental.tenant_id == tenant_id,
                Rental.property_id == property_id,
                Rental.start_date == start_date,
            )
            .order_by(Rental.end_date.is_(None).desc(), Rental.id.desc())
            .limit(1)
        )
        if lock:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        return self.db.scalar(stmt)

    def add_agreement(
        self,
        tenant_id: int,
        property_id: int,
        start_date: date,
        monthly_rent: Decimal,
        commission: Decimal | None = None,
    ) -> Rental:
        rental = Rental(
            tenant_id=tenant_id,
            property_id=property_id,
            start_date=start_date,
            monthly_rent=monthly_rent,
            commission=commission,
        )
        self.db.add(rental)
        self.db.flush()
        return rental

    def close_agreement(self, rental: Rental, end_date: date) -> bool:
        """Set ``end_date`` on an open agreement; False when it was already closed."""
        result = self.db.execute(
            update(Rental)
            .where(Rental.id == rental.id, Rental.end_date.is_(None))
            .values(end_date=end_date)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return False
        set_committed_value(rental, "end_date", end_date)
        return True

    def history_for_property(self, property_id: int) -> list[Rental]:
        stmt = self._detailed().where(Rental.property_id == property_id).order_by(Rental.start_date.desc(), Rental.id.desc())
        return list(self.db.scalars(stmt).unique())

    def active_for_tenant(self, tenant_id: int) -> Rental | None:
        return self.db.scalar(
            self._detailed()
            .where(Rental.tenant_id == tenant_id, Rental.end_date.is_(None))
            .order_by(Rental.start_date.desc())
        )

    def active_for_owner(self, owner_id: int) -> list[Rental]:
        stmt = (
            self._detailed()
            .join(Property, Property.id == Rental.property_id)
            .where(Property.owner_id == owner_id, Rental.end_date.is_(None))
            .order_by(Rental.start_date.desc())
        )
        return list(self.db.scalars(stmt).unique())

    def list_active(self) -> list[Rental]:
        stmt = self._detailed().where(Rental.end_date.is_(None)).order_by(Rental.start_date.desc())
        return list(self.db.scalars(stmt).unique())
