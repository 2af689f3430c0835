# models/registration.py

from pydantic import EmailStr

from models.base import CamelModel, RequiredStr


# --------------------------------------------------------------------
# PUBLIC REQUEST BODIES: what the landing-page modals send
# --------------------------------------------------------------------
class SocietyRegistration(CamelModel):
    name: RequiredStr
    address: RequiredStr
    contact_number: RequiredStr
    admin_name: RequiredStr
    admin_email: EmailStr


class ResidentRegistration(CamelModel):
    full_name: RequiredStr
    email: EmailStr
    phone_number: RequiredStr
    society_id: RequiredStr
    flat_number: RequiredStr
    ownership_type: RequiredStr = "owner"


class WatchmanRegistration(CamelModel):
    full_name: RequiredStr
    email: EmailStr
    phone_number: RequiredStr
    society_id: RequiredStr
    shift: RequiredStr = "Day"
