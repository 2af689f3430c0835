# models/provisioning.py

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, Optional

from pydantic import EmailStr, field_validator

from models.base import CamelModel, RequiredStr
from models.enums import ProfileRole


# ===============================================================
# CREATE IDENTITY PAYLOADS
# One per role; the profile columns each role carries differ.
# ===============================================================
class CreateIdentityBase(CamelModel, ABC):
    email: EmailStr
    password: RequiredStr
    society_id: RequiredStr

    role: ClassVar[ProfileRole]

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Name written to profiles.full_name and used in the email greeting."""

    def profile_fields(self) -> Dict[str, Any]:
        """Role-specific profiles columns."""
        return {}


class AdminCreate(CreateIdentityBase):
    """Society admin, created when an executive approves a society."""

    admin_name: RequiredStr
    role: ClassVar[ProfileRole] = ProfileRole.admin

    @property
    def display_name(self) -> str:
        return self.admin_name


class ResidentCreate(CreateIdentityBase):
    full_name: RequiredStr
    flat_number: RequiredStr
    ownership_type: RequiredStr
    phone_number: RequiredStr
    role: ClassVar[ProfileRole] = ProfileRole.resident

    @property
    def display_name(self) -> str:
        return self.full_name

    def profile_fields(self) -> Dict[str, Any]:
        return {
            "flat_number": self.flat_number,
            "ownership_type": self.ownership_type,
            "phone_number": self.phone_number,
        }


class WatchmanCreate(CreateIdentityBase):
    full_name: RequiredStr
    shift: RequiredStr
    phone_number: RequiredStr
    role: ClassVar[ProfileRole] = ProfileRole.watchman

    @property
    def display_name(self) -> str:
        return self.full_name

    def profile_fields(self) -> Dict[str, Any]:
        return {
            "shift": self.shift,
            "phone_number": self.phone_number,
        }


# ===============================================================
# DELETE PAYLOADS
# ===============================================================
class DeleteUserRequest(CamelModel):
    user_id: RequiredStr
    email: Optional[str] = None
    role: Optional[ProfileRole] = None

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, v):
        if v is None or v == "":
            return None
        return ProfileRole.parse(v)


class DeleteSocietyRequest(CamelModel):
    society_id: RequiredStr


# ===============================================================
# EMAIL
# ===============================================================
class SendEmailRequest(CamelModel):
    to: EmailStr
    name: RequiredStr
    temp_pass: RequiredStr
