# models/__init__.py
from .base import Base, RecordState, SoftDeleteMixin
from .user import User, UserRole
from .property import Property
from .floor import Floor
from .local import Local, LocalStatus
from .tenant import Tenant
from .lease import Lease, LeaseStatus
from .payment import Payment, PaymentMode
from .expense import Expense
from .notification import Notification, NotificationType

__all__ = [
     "Base",
     "RecordState",
     "SoftDeleteMixin",
     "User",
     "UserRole",
     "Property",
     "Floor",
     "Local",
     "LocalStatus",
     "Tenant",
     "Lease",
     "LeaseStatus",
     "Payment",
     "PaymentMode",
     "Expense",
     "Notification",
     "NotificationType",
]
