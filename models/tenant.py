# models/tenant.py
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from .base import Base, SoftDeleteMixin, TimestampMixin


class Tenant(SoftDeleteMixin, TimestampMixin, Base):
     """
     Tenant model - the person or company renting a local.
     Tenants are not users of the application.
     """
     __tablename__ = "tenants"

     id = Column(Integer, primary_key=True, autoincrement=True)

     # Representative
     name = Column(String(200), nullable=False)
     email = Column(String(255), nullable=True)
     phone = Column(String(50), nullable=True)

     # Company
     company_name = Column(String(255), nullable=True)
     tin_number = Column(String(100), nullable=True)

     # Relationships
     leases = relationship("Lease", back_populates="tenant")

     def __repr__(self):
          return f"<Tenant(id={self.id}, name='{self.name}')>"
