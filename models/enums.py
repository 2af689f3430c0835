from enum import Enum
from typing import Optional


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def parse(cls, value):
        """Case-insensitive lookup; the canonical form is lower case."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls(value.strip().lower())
        return cls(value)


# -----------------------------------------------------
# PROFILE ROLE
# -----------------------------------------------------
class ProfileRole(BaseStrEnum):
    """
    Role stored on a profiles row.

    `executive` exists only at the UI login boundary (hard-coded
    credentials). No create payload carries it, so it is never
    written to profiles.
    """

    admin = "admin"
    resident = "resident"
    watchman = "watchman"
    executive = "executive"

    @property
    def request_table(self) -> Optional[str]:
        """Pending self-registration table for this role, if it has one."""
        return REQUEST_TABLES.get(self)


REQUEST_TABLES = {
    ProfileRole.resident: "resident_requests",
    ProfileRole.watchman: "watchman_requests",
}


# -----------------------------------------------------
# SOCIETY STATUS
# -----------------------------------------------------
class SocietyStatus(BaseStrEnum):
    """Registration lifecycle; `rejected` is terminal."""

    pending = "pending"
    approved = "approved"
    rejected = "rejected"


# -----------------------------------------------------
# RESIDENT / WATCHMAN REQUEST STATUS
# -----------------------------------------------------
class RequestStatus(BaseStrEnum):
    pending = "pending"
    approved = "approved"
