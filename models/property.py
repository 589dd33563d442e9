# models/property.py
from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base, SoftDeleteMixin, TimestampMixin


class Property(SoftDeleteMixin, TimestampMixin, Base):
     """
     Property model - a building made of floors, each holding locals.
     Floors are generated from number_of_floors / has_basement.
     """
     __tablename__ = "properties"

     id = Column(Integer, primary_key=True, autoincrement=True)
     name = Column(String(255), nullable=False)
     location = Column(String(255), nullable=False)
     description = Column(Text, nullable=True)
     number_of_floors = Column(Integer, default=1, nullable=False)
     has_basement = Column(Boolean, default=False, nullable=False)
     manager_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

     # Relationships
     manager = relationship("User", back_populates="managed_properties")
     floors = relationship("Floor", back_populates="parent_property", order_by="Floor.level_number")
     locals = relationship("Local", back_populates="parent_property")
     expenses = relationship("Expense", back_populates="parent_property")

     def __repr__(self):
          return f"<Property(id={self.id}, name='{self.name}')>"

     @property
     def owning_property(self) -> "Property":
          return self
