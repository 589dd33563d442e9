# services/notification_service.py
from typing import Optional

from sqlalchemy.orm import Session

from exceptions import NotFoundError
from models import Notification, User


def notify(
     db: Session,
     user_id: int,
     message: str,
     type: str,
     lease_id: Optional[int] = None,
     payment_id: Optional[int] = None,
) -> Notification:
     notification = Notification(
          user_id=user_id,
          message=message,
          type=type,
          lease_id=lease_id,
          payment_id=payment_id,
     )
     db.add(notification)
     return notification


def user_notifications(db: Session, user: User, unread_only: bool = False):
     """Query of the user's own notifications, newest first."""
     query = db.query(Notification).filter(Notification.user_id == user.id)
     if unread_only:
          query = query.filter(Notification.is_read.is_(False))
     return query.order_by(Notification.created_at.desc(), Notification.id.desc())


def all_notifications(db: Session):
     return db.query(Notification).order_by(Notification.created_at.desc(), Notification.id.desc())


def mark_as_read(db: Session, user: User, notification_id: int) -> Notification:
     """Recipients only; anyone else's notification is reported missing."""
     notification = (
          db.query(Notification)
          .filter(Notification.id == notification_id, Notification.user_id == user.id)
          .first()
     )
     if not notification:
          raise NotFoundError("Notification not found")
     notification.mark_as_read()
     db.flush()
     return notification
