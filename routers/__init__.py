# routers/__init__.py

from .health import router as health_router
from .admin import router as admin_router
from .email import router as email_router
from .approvals import router as approvals_router
from .registration import router as registration_router


ALL_ROUTERS = [
    health_router,
    admin_router,
    email_router,
    approvals_router,
    registration_router,
]

__all__ = ["ALL_ROUTERS"]
