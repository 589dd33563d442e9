# models/expense.py
from datetime import date as date_type

from sqlalchemy import Column, Integer, String, Numeric, Date, Text, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base, SoftDeleteMixin, TimestampMixin


class Expense(SoftDeleteMixin, TimestampMixin, Base):
     """Money spent on a property or one of its locals."""
     __tablename__ = "expenses"

     id = Column(Integer, primary_key=True, autoincrement=True)
     amount = Column(Numeric(12, 2), nullable=False)
     category = Column(String(100), nullable=False, index=True)
     description = Column(Text, nullable=True)
     date = Column(Date, default=date_type.today, nullable=False)
     property_id = Column(Integer, ForeignKey("properties.id"), nullable=True, index=True)
     local_id = Column(Integer, ForeignKey("locals.id"), nullable=True, index=True)

     parent_property = relationship("Property", back_populates="expenses")
     local = relationship("Local", back_populates="expenses")

     def __repr__(self):
          return f"<Expense(id={self.id}, category='{self.category}', amount={self.amount})>"

     @property
     def owning_property(self):
          if self.parent_property is not None:
               return self.parent_property
          return self.local.parent_property if self.local else None
