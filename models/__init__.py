# -------------------------
# Enums
# -------------------------
from .enums import (
    ProfileRole,
    SocietyStatus,
    RequestStatus,
)

# -------------------------
# Shared base
# -------------------------
from .base import CamelModel, RequiredStr

# -------------------------
# Provisioning Models (admin API)
# -------------------------
from .provisioning import (
    CreateIdentityBase,
    AdminCreate,
    ResidentCreate,
    WatchmanCreate,
    DeleteUserRequest,
    DeleteSocietyRequest,
    SendEmailRequest,
)

# -------------------------
# Registration Models (public)
# -------------------------
from .registration import (
    SocietyRegistration,
    ResidentRegistration,
    WatchmanRegistration,
)

# -------------------------
# Caller identity
# -------------------------
from .profile import CurrentUser

__all__ = [
    # enums
    "ProfileRole",
    "SocietyStatus",
    "RequestStatus",

    # base
    "CamelModel",
    "RequiredStr",

    # provisioning
    "CreateIdentityBase",
    "AdminCreate",
    "ResidentCreate",
    "WatchmanCreate",
    "DeleteUserRequest",
    "DeleteSocietyRequest",
    "SendEmailRequest",

    # registration
    "SocietyRegistration",
    "ResidentRegistration",
    "WatchmanRegistration",

    # caller
    "CurrentUser",
]
