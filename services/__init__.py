# services/__init__.py
from .authorization import Action, authorize, scope_query
from .property_service import PropertyService
from .floor_service import FloorService
from .local_service import LocalService
from .tenant_service import TenantService
from .lease_service import LeaseService
from .payment_service import PaymentService
from .expense_service import ExpenseService
from .user_service import UserService
from .occupancy_service import (
     summarize,
     floor_occupancy,
     floors_occupancy,
     property_occupancy,
)
from .lease_lifecycle import expire_leases, notify_upcoming_payments

__all__ = [
     "Action",
     "authorize",
     "scope_query",
     "PropertyService",
     "FloorService",
     "LocalService",
     "TenantService",
     "LeaseService",
     "PaymentService",
     "ExpenseService",
     "UserService",
     "summarize",
     "floor_occupancy",
     "floors_occupancy",
     "property_occupancy",
     "expire_leases",
     "notify_upcoming_payments",
]
