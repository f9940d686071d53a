"""Property model module.

Properties are owned by the listing side of the marketplace; the rental
workflow only reads the owner and the current listed rent.
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rentdesk.models.base import AuditMixin, Base


class Property(Base, AuditMixin):
    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    locality: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    rent: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    owner = relationship("User")

    @property
    def label(self) -> str:
        return f"{self.locality}, {self.address}"
