# services/lease_lifecycle.py
"""
Lease Lifecycle - time-driven work over leases.

- expire_leases: active leases whose end_date has passed become expired.
- notify_upcoming_payments: reminders for leases whose current payment
  period ends within a month.

Both run inside the caller's transaction: the HTTP triggers commit with
the request, ``jobs.py`` commits through get_session_context(). A
failure part-way rolls the whole batch back.
"""
import logging
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

from dateutil.relativedelta import relativedelta
from sqlalchemy import update
from sqlalchemy.orm import Session

from config import PAYMENT_REMINDER_INTERVAL_DAYS
from models import (
     Lease,
     LeaseStatus,
     Notification,
     NotificationType,
     Payment,
     User,
     UserRole,
)

logger = logging.getLogger(__name__)


def expire_leases(db: Session, today: Optional[date] = None) -> int:
     """
     Mark every active lease with end_date before ``today`` as expired.

     Idempotent: a second run on the same day updates nothing.

     Returns:
          Number of leases updated
     """
     today = today or date.today()
     result = db.execute(
          update(Lease)
          .where(
               Lease.status == LeaseStatus.ACTIVE,
               Lease.end_date < today,
               Lease.deleted_at.is_(None),
          )
          .values(status=LeaseStatus.EXPIRED)
          .execution_options(synchronize_session="fetch")
     )
     count = result.rowcount or 0
     if count:
          logger.info("%d lease(s) marked as expired", count)
     else:
          logger.info("No leases to expire on %s", today)
     return count


def current_periods(db: Session) -> Dict[int, Payment]:
     """Latest payment (by end_date) of each active lease, keyed by lease id."""
     payments = (
          db.query(Payment)
          .join(Lease, Payment.lease_id == Lease.id)
          .filter(Lease.status == LeaseStatus.ACTIVE)
          .order_by(Payment.lease_id, Payment.end_date, Payment.id)
          .all()
     )
     latest: Dict[int, Payment] = {}
     for payment in payments:
          latest[payment.lease_id] = payment
     return latest


def reminder_recipients(db: Session, lease: Lease) -> List[User]:
     """The property's manager when one is assigned, otherwise every active admin."""
     prop = lease.owning_property
     if prop is not None and prop.manager is not None and prop.manager.is_active:
          return [prop.manager]
     return (
          db.query(User)
          .filter(User.role == UserRole.ADMIN, User.is_active.is_(True))
          .order_by(User.id)
          .all()
     )


def _recently_reminded(db: Session, lease_id: int, user_id: int, now: datetime) -> bool:
     since = now - timedelta(days=PAYMENT_REMINDER_INTERVAL_DAYS)
     return (
          db.query(Notification.id)
          .filter(
               Notification.lease_id == lease_id,
               Notification.user_id == user_id,
               Notification.type == NotificationType.PAYMENT_DUE,
               Notification.is_read.is_(False),
               Notification.created_at >= since,
          )
          .first()
          is not None
     )


def notify_upcoming_payments(db: Session, today: Optional[date] = None) -> int:
     """
     Create payment_due notifications for active leases whose current
     payment period ends between ``today`` and one month later.

     A recipient with an unread reminder for the same lease from the last
     PAYMENT_REMINDER_INTERVAL_DAYS is skipped.

     Returns:
          Number of notifications created
     """
     today = today or date.today()
     horizon = today + relativedelta(months=1)
     now = datetime.utcnow()

     created = 0
     for lease_id, payment in current_periods(db).items():
          if not (today <= payment.end_date <= horizon):
               continue
          lease = payment.lease
          message = (
               f"Payment for lease {lease.reference} will expire on "
               f"{payment.end_date.strftime('%a %b %d %Y')}. Please update your payment."
          )
          for user in reminder_recipients(db, lease):
               if _recently_reminded(db, lease_id, user.id, now):
                    continue
               db.add(Notification(
                    user_id=user.id,
                    message=message,
                    type=NotificationType.PAYMENT_DUE,
                    lease_id=lease_id,
                    payment_id=payment.id,
                    created_at=now,
               ))
               created += 1
     db.flush()
     logger.info("%d payment reminder(s) created", created)
     return created
