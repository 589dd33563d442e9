# models/local.py
import enum

from sqlalchemy import Column, Integer, String, Numeric, Enum, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base, SoftDeleteMixin, TimestampMixin


class LocalStatus(str, enum.Enum):
     AVAILABLE = "available"
     OCCUPIED = "occupied"
     MAINTENANCE = "maintenance"


class Local(SoftDeleteMixin, TimestampMixin, Base):
     """
     Local model - a rentable unit (office, shop, apartment) on a floor.
     floor_id and property_id always point at the same property.
     """
     __tablename__ = "locals"

     id = Column(Integer, primary_key=True, autoincrement=True)
     reference_code = Column(String(100), nullable=False)
     status = Column(
          Enum(LocalStatus, name="local_status", values_callable=lambda e: [m.value for m in e]),
          default=LocalStatus.AVAILABLE,
          nullable=False,
          index=True,
     )
     size_m2 = Column(Numeric(10, 2), nullable=True)
     rent_price = Column(Numeric(12, 2), nullable=True)
     property_id = Column(Integer, ForeignKey("properties.id"), nullable=False, index=True)
     floor_id = Column(Integer, ForeignKey("floors.id"), nullable=False, index=True)

     # Relationships
     parent_property = relationship("Property", back_populates="locals")
     floor = relationship("Floor", back_populates="locals")
     leases = relationship("Lease", back_populates="local")
     expenses = relationship("Expense", back_populates="local")

     def __repr__(self):
          return f"<Local(id={self.id}, reference_code='{self.reference_code}', status='{self.status.value}')>"

     @property
     def owning_property(self):
          return self.parent_property
