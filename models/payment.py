# models/payment.py
from sqlalchemy import Column, Integer, String, Numeric, Date, Boolean, Text, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base, SoftDeleteMixin, TimestampMixin


class PaymentMode(SoftDeleteMixin, TimestampMixin, Base):
     """Static reference data: cash, bank transfer, mobile money..."""
     __tablename__ = "payment_modes"

     id = Column(Integer, primary_key=True, autoincrement=True)
     code = Column(String(50), unique=True, nullable=False)
     display_name = Column(String(100), nullable=False)
     requires_proof = Column(Boolean, default=False, nullable=False)
     description = Column(Text, nullable=True)

     payments = relationship("Payment", back_populates="payment_mode")

     def __repr__(self):
          return f"<PaymentMode(id={self.id}, code='{self.code}')>"


class Payment(SoftDeleteMixin, TimestampMixin, Base):
     """
     Payment model - money received against a lease for the period
     [start_date, end_date].
     """
     __tablename__ = "payments"

     id = Column(Integer, primary_key=True, autoincrement=True)
     amount = Column(Numeric(12, 2), nullable=False)
     start_date = Column(Date, nullable=False)
     end_date = Column(Date, nullable=False, index=True)
     invoice_number = Column(String(50), unique=True, nullable=False)
     proof_url = Column(String(500), nullable=True)
     lease_id = Column(Integer, ForeignKey("leases.id"), nullable=False, index=True)
     payment_mode_id = Column(Integer, ForeignKey("payment_modes.id"), nullable=False)

     # Relationships
     lease = relationship("Lease", back_populates="payments")
     payment_mode = relationship("PaymentMode", back_populates="payments")

     def __repr__(self):
          return f"<Payment(id={self.id}, invoice_number='{self.invoice_number}', amount={self.amount})>"

     @property
     def owning_property(self):
          return self.lease.owning_property if self.lease else None
