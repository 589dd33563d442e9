# models/lease.py
import enum

from sqlalchemy import Column, Integer, String, Numeric, Date, Enum, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base, SoftDeleteMixin, TimestampMixin


class LeaseStatus(str, enum.Enum):
     """Lease lifecycle. active -> expired happens automatically once end_date passes."""
     ACTIVE = "active"
     EXPIRED = "expired"
     CANCELLED = "cancelled"


# Transitions allowed through a manual edit
LEASE_TRANSITIONS = {
     LeaseStatus.ACTIVE: {LeaseStatus.EXPIRED, LeaseStatus.CANCELLED},
     LeaseStatus.EXPIRED: {LeaseStatus.CANCELLED},
     LeaseStatus.CANCELLED: set(),
}


class Lease(SoftDeleteMixin, TimestampMixin, Base):
     """
     Lease model - rental agreement binding one tenant to one local.
     """
     __tablename__ = "leases"

     id = Column(Integer, primary_key=True, autoincrement=True)
     reference = Column(String(100), unique=True, nullable=False)
     start_date = Column(Date, nullable=False)
     end_date = Column(Date, nullable=False, index=True)
     lease_amount = Column(Numeric(12, 2), nullable=False, default=0)
     status = Column(
          Enum(LeaseStatus, name="lease_status", values_callable=lambda e: [m.value for m in e]),
          default=LeaseStatus.ACTIVE,
          nullable=False,
          index=True,
     )
     local_id = Column(Integer, ForeignKey("locals.id"), nullable=False, index=True)
     tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False, index=True)

     # Relationships
     local = relationship("Local", back_populates="leases")
     tenant = relationship("Tenant", back_populates="leases")
     payments = relationship("Payment", back_populates="lease", order_by="Payment.end_date")

     def __repr__(self):
          return f"<Lease(id={self.id}, reference='{self.reference}', status='{self.status.value}')>"

     @property
     def owning_property(self):
          return self.local.parent_property if self.local else None

     def can_transition_to(self, status: LeaseStatus) -> bool:
          return status == self.status or status in LEASE_TRANSITIONS[self.status]
