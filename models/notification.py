# models/notification.py
from sqlalchemy import Column, Integer, String, Boolean, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class NotificationType:
     PAYMENT_DUE = "payment_due"
     USER_REGISTER = "user_register"
     USER_UPDATE = "user_update"
     USER_DISABLE = "user_disable"
     USER_ENABLE = "user_enable"


class Notification(Base):
     """
     In-app message for one user. Created by system events, marked read by
     the recipient, never deleted.
     """
     __tablename__ = "notifications"

     id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
     message = Column(Text, nullable=False)
     type = Column(String(50), nullable=False, index=True)
     is_read = Column(Boolean, default=False, nullable=False)
     lease_id = Column(Integer, ForeignKey("leases.id"), nullable=True, index=True)
     payment_id = Column(Integer, ForeignKey("payments.id"), nullable=True)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     user = relationship("User", back_populates="notifications")

     def __repr__(self):
          return f"<Notification(id={self.id}, user_id={self.user_id}, type='{self.type}', is_read={self.is_read})>"

     def mark_as_read(self) -> None:
          self.is_read = True
