from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from supabase import Client

from core.config import settings
from core.errors import Forbidden, Unauthorized
from core.logging_config import logger
from core.supabase_client import get_supabase_client
from models.enums import ProfileRole
from models.profile import CurrentUser


# auto_error=False: a missing header must be a 401 with our error body
bearer_scheme = HTTPBearer(auto_error=False)


# ============================================================
# AUTH DECODING (Supabase: validates the access token)
# ============================================================
def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    client: Client = Depends(get_supabase_client),
) -> CurrentUser:
    """
    Exchange the bearer token for a Supabase Auth user.
    Re-verified on every request; nothing is cached.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Unauthorized: No token")

    try:
        auth_resp = client.auth.get_user(credentials.credentials)
    except Exception as e:
        logger.info(f"Token verification failed: {type(e).__name__}")
        raise Unauthorized("Unauthorized: Invalid token")

    auth_user = getattr(auth_resp, "user", None) if auth_resp else None
    if auth_user is None:
        raise Unauthorized("Unauthorized: Invalid token")

    # role stays unset until require_admin reads the profile
    return CurrentUser(id=auth_user.id, email=getattr(auth_user, "email", None))


# ============================================================
# ADMIN CHECK (profiles.role must be exactly "admin")
# ============================================================
def require_admin(
    current_user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_supabase_client),
) -> CurrentUser:
    try:
        result = (
            client.table("profiles")
            .select("id, email, full_name, role, society_id")
            .eq("id", current_user.id)
            .maybe_single()
            .execute()
        )
        profile = result.data if result else None
    except Exception as e:
        logger.warning(f"Profile lookup failed for {current_user.id}: {e}")
        profile = None

    if not profile or profile.get("role") != ProfileRole.admin.value:
        raise Forbidden("Forbidden: Admins only")

    return CurrentUser(
        id=current_user.id,
        email=profile.get("email") or current_user.email,
        role=ProfileRole.admin,
        full_name=profile.get("full_name"),
        society_id=profile.get("society_id"),
    )


# ============================================================
# MEMBER PROVISIONING GATE
# create-resident / create-watchman / send-email
# ============================================================
def require_admin_for_member_provisioning(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    client: Client = Depends(get_supabase_client),
) -> Optional[CurrentUser]:
    """
    Admin check when REQUIRE_ADMIN_FOR_MEMBER_PROVISIONING is on (default);
    lets anyone through when it is off.
    """
    if not settings.REQUIRE_ADMIN_FOR_MEMBER_PROVISIONING:
        return None

    return require_admin(get_current_user(credentials, client), client)
