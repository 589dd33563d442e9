# routers/__init__.py
from .users import router as users_router
from .profile import router as profile_router
from .properties import router as properties_router
from .floors import router as floors_router
from .locals import router as locals_router
from .tenants import router as tenants_router
from .leases import router as leases_router, report_router
from .payment_modes import router as payment_modes_router
from .payments import router as payments_router
from .expenses import router as expenses_router
from .notifications import router as notifications_router

ALL_ROUTERS = [
     users_router,
     profile_router,
     properties_router,
     floors_router,
     locals_router,
     tenants_router,
     leases_router,
     report_router,
     payment_modes_router,
     payments_router,
     expenses_router,
     notifications_router,
]

__all__ = ["ALL_ROUTERS"]
