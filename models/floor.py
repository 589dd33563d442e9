# models/floor.py
from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base, SoftDeleteMixin, TimestampMixin


class Floor(SoftDeleteMixin, TimestampMixin, Base):
     """
     Floor model - one level of a property.
     level_number: -1 = basement, 0 = ground, 1 = first floor, etc.
     """
     __tablename__ = "floors"
     __table_args__ = (
          UniqueConstraint("property_id", "level_number", name="uq_floors_property_level"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(Integer, ForeignKey("properties.id"), nullable=False, index=True)
     name = Column(String(50), nullable=False)
     level_number = Column(Integer, nullable=False)

     # Relationships
     parent_property = relationship("Property", back_populates="floors")
     locals = relationship("Local", back_populates="floor")

     def __repr__(self):
          return f"<Floor(id={self.id}, property_id={self.property_id}, level={self.level_number})>"

     @property
     def owning_property(self):
          return self.parent_property
