# models/user.py
import enum

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum, func
from sqlalchemy.orm import relationship
from .base import Base


class UserRole(str, enum.Enum):
     """Roles recognised by the authorization policy."""
     ADMIN = "admin"
     MANAGER = "manager"
     EMPLOYEE = "employee"


class User(Base):
     """
     User model - central authentication table.
     Admins manage everything; managers are scoped to the properties
     they are assigned to (Property.manager_id).
     """
     __tablename__ = "users"

     id = Column(Integer, primary_key=True, autoincrement=True)
     email = Column(String(255), unique=True, nullable=False, index=True)
     password_hash = Column(String(255), nullable=False)
     full_name = Column(String(200), nullable=False)
     role = Column(
          Enum(UserRole, name="user_role", values_callable=lambda e: [m.value for m in e]),
          default=UserRole.EMPLOYEE,
          nullable=False,
     )
     phone = Column(String(50), nullable=True)
     avatar = Column(String(500), nullable=True)
     is_active = Column(Boolean, default=True, nullable=False)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     managed_properties = relationship("Property", back_populates="manager")
     notifications = relationship("Notification", back_populates="user")

     def __repr__(self):
          return f"<User(id={self.id}, email='{self.email}', role='{self.role.value}')>"
