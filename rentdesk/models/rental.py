"""Rental agreement model module."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Index, Integer, Numeric, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rentdesk.models.base import AuditMixin, Base
from rentdesk.models.enums import AgreementState


class Rental(Base, AuditMixin):
    __tablename__ = "rentals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    tenant_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="RESTRICT"), nullable=False)
    property_id: Mapped[int] = mapped_column(ForeignKey("properties.id", ondelete="RESTRICT"), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date)
    monthly_rent: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    commission: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))

    tenant = relationship("User")
    listing = relationship("Property")

    __table_args__ = (
        Index("idx_rentals_tenant_property_start", "tenant_id", "property_id", "start_date"),
        # At most one open agreement per property.
        Index(
            "uq_rentals_open_property",
            "property_id",
            unique=True,
            sqlite_where=text("end_date IS NULL"),
            postgresql_where=text("end_date IS NULL"),
        ),
        Index("idx_rentals_tenant", "tenant_id"),
    )

    @property
    def state(self) -> AgreementState:
        return AgreementState.OPEN if self.end_date is None else AgreementState.CLOSED
