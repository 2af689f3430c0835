# models/profile.py

from typing import Optional

from pydantic import BaseModel

from models.enums import ProfileRole


class CurrentUser(BaseModel):
    """
    Caller that passed the bearer-token check, built from the
    Supabase Auth user plus their profiles row.
    """

    id: str
    email: Optional[str] = None
    role: Optional[ProfileRole] = None
    full_name: Optional[str] = None
    society_id: Optional[str] = None
