# schemas/__init__.py
from .common import (
     PageResponse,
     ItemResponse,
     MessageResponse,
     CountMessageResponse,
     ErrorResponse,
)
from .user import (
     LoginRequest,
     LoginResponse,
     RegisterRequest,
     UserUpdate,
     ProfileUpdate,
     PasswordChange,
     UserResponse,
)
from .local import LocalCreate, LocalUpdate, LocalStatusUpdate, LocalSummary, LocalResponse
from .floor import (
     OccupancyStats,
     FloorUpdate,
     FloorResponse,
     FloorDetailResponse,
     FloorOccupancy,
     OccupancyReportResponse,
)
from .property import PropertyCreate, PropertyUpdate, AssignManagerRequest, PropertyResponse
from .tenant import TenantCreate, TenantUpdate, TenantResponse
from .lease import LeaseCreate, LeaseUpdate, LeaseResponse
from .payment import PaymentModeCreate, PaymentModeUpdate, PaymentModeResponse, PaymentResponse
from .expense import ExpenseCreate, ExpenseUpdate, ExpenseResponse
from .notification import NotificationResponse

__all__ = [
     "PageResponse",
     "ItemResponse",
     "MessageResponse",
     "CountMessageResponse",
     "ErrorResponse",
     "LoginRequest",
     "LoginResponse",
     "RegisterRequest",
     "UserUpdate",
     "ProfileUpdate",
     "PasswordChange",
     "UserResponse",
     "LocalCreate",
     "LocalUpdate",
     "LocalStatusUpdate",
     "LocalSummary",
     "LocalResponse",
     "OccupancyStats",
     "FloorUpdate",
     "FloorResponse",
     "FloorDetailResponse",
     "FloorOccupancy",
     "OccupancyReportResponse",
     "PropertyCreate",
     "PropertyUpdate",
     "AssignManagerRequest",
     "PropertyResponse",
     "TenantCreate",
     "TenantUpdate",
     "TenantResponse",
     "LeaseCreate",
     "LeaseUpdate",
     "LeaseResponse",
     "PaymentModeCreate",
     "PaymentModeUpdate",
     "PaymentModeResponse",
     "PaymentResponse",
     "ExpenseCreate",
     "ExpenseUpdate",
     "ExpenseResponse",
     "NotificationResponse",
]
