"""Rental request model module."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Date, DateTime, Enum, ForeignKey, Index, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rentdesk.models.base import AuditMixin, Base
from rentdesk.models.enums import RentalRequestStatus

_STATUS_TYPE = Enum(
    RentalRequestStatus,
    values_callable=lambda e: [m.value for m in e],
    native_enum=False,
    length=20,
    name="rental_request_status",
)


class RentalRequest(Base, AuditMixin):
    __tablename__ = "rental_requests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    tenant_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="RESTRICT"), nullable=False)
    property_id: Mapped[int] = mapped_column(ForeignKey("properties.id", ondelete="RESTRICT"), nullable=False)
    request_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[RentalRequestStatus] = mapped_column(
        _STATUS_TYPE, default=RentalRequestStatus.PENDING, nullable=False
    )
    reviewed_by: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="RESTRICT"))
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    rejection_reason: Mapped[str | None] = mapped_column(Text)

    tenant = relationship("User", foreign_keys=[tenant_id])
    reviewer = relationship("User", foreign_keys=[reviewed_by])
    listing = relationship("Property")

    __table_args__ = (
        # At most one pending request per (tenant, property).
        Index(
            "uq_rental_requests_pending_tenant_property",
            "tenant_id",
            "property_id",
            unique=True,
            sqlite_where=text("status = 'pending'"),
            postgresql_where=text("status = 'pending'"),
        ),
        Index("idx_rental_requests_property", "property_id"),
        Index("idx_rental_requests_status", "status"),
    )
