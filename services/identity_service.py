# services/identity_service.py

"""
Identity lifecycle against Supabase Auth + the profiles table.

None of these sequences is transactional. Each step is its own network
call, run in order, and a failure part-way leaves earlier steps applied:

    create:  auth user  →  profiles upsert (best effort)
    delete:  auth user (404 tolerated)  →  profiles row  →  pending request row
    society: every member's auth user  →  their profiles rows  →  societies row
"""

from typing import Optional

from supabase import Client

from core.errors import extract_supabase_error, is_not_found_error, upstream_error
from core.logging_config import logger
from models.enums import ProfileRole
from models.provisioning import CreateIdentityBase


# -----------------------------------------------------
# CREATE
# -----------------------------------------------------
def create_identity(client: Client, payload: CreateIdentityBase) -> str:
    """
    Create a confirmed Supabase Auth user and upsert its profile.

    Returns the new user id. A failed auth call raises UpstreamError and
    nothing is written. A failed profile upsert is only logged: the auth
    user exists without a profile and the caller still gets the id.
    """
    password = payload.password.strip()

    logger.info(f"Creating {payload.role.value}: {payload.email}")

    try:
        auth_resp = client.auth.admin.create_user(
            {
                "email": payload.email,
                "password": password,
                "email_confirm": True,
            }
        )
    except Exception as e:
        logger.error(f"Auth Error creating {payload.email}: {extract_supabase_error(e)}")
        raise upstream_error(e) from e

    user_id = auth_resp.user.id

    profile = {
        "id": user_id,
        "email": payload.email,
        "full_name": payload.display_name,
        "role": payload.role.value,
        "society_id": payload.society_id,
        "is_approved": True,
        **payload.profile_fields(),
    }

    try:
        client.table("profiles").upsert(profile).execute()
    except Exception as e:
        logger.error(
            f"Profile Error for {user_id} ({payload.email}): {extract_supabase_error(e)} "
            "(auth user left without a profile)"
        )

    return user_id


# -----------------------------------------------------
# DELETE USER
# -----------------------------------------------------
def delete_identity(
    client: Client,
    user_id: str,
    email: Optional[str] = None,
    role: Optional[ProfileRole] = None,
) -> None:
    """
    Delete the auth user, its profile, and (given email + role) the
    matching pending request row.

    An already-missing auth user is not an error, so a half-finished
    earlier attempt can simply be retried. Only a non-404 auth failure
    raises; profile and request cleanup failures are logged.
    """
    logger.info(f"Deleting user: {user_id} ({email}, {role.value if role else None})")

    try:
        client.auth.admin.delete_user(user_id)
    except Exception as e:
        if not is_not_found_error(e):
            logger.error(f"Auth Delete Error for {user_id}: {extract_supabase_error(e)}")
            raise upstream_error(e) from e
        logger.info(f"Auth user {user_id} already gone, continuing cleanup")

    try:
        client.table("profiles").delete().eq("id", user_id).execute()
    except Exception as e:
        logger.warning(f"Profile delete failed for {user_id}: {extract_supabase_error(e)}")

    table = role.request_table if role else None
    if email and table:
        try:
            client.table(table).delete().eq("email", email).execute()
        except Exception as e:
            logger.warning(f"{table} cleanup failed for {email}: {extract_supabase_error(e)}")


# -----------------------------------------------------
# DELETE SOCIETY
# -----------------------------------------------------
def delete_society(client: Client, society_id: str) -> int:
    """
    Delete every member identity of a society, then the society itself.

    Members are deleted one at a time. A member whose auth deletion fails
    is logged and skipped. If the final societies delete fails the request
    is reported as failed even though members are already gone.

    Returns the number of member identities deleted.
    """
    try:
        result = (
            client.table("profiles")
            .select("id")
            .eq("society_id", society_id)
            .execute()
        )
    except Exception as e:
        raise upstream_error(e) from e

    profiles = result.data or []
    deleted = 0

    for profile in profiles:
        member_id = profile["id"]
        try:
            client.auth.admin.delete_user(member_id)
        except Exception as e:
            if not is_not_found_error(e):
                logger.warning(f"Could not delete user {member_id}: {extract_supabase_error(e)}")
                continue
        deleted += 1
        logger.info(f"Deleted user: {member_id}")

    # Auth deletion does not reach profiles rows in every schema
    try:
        client.table("profiles").delete().eq("society_id", society_id).execute()
    except Exception as e:
        logger.warning(f"Profile cleanup failed for society {society_id}: {extract_supabase_error(e)}")

    # Request tables cascade from societies
    try:
        client.table("societies").delete().eq("id", society_id).execute()
    except Exception as e:
        logger.error(f"Delete Society Error for {society_id}: {extract_supabase_error(e)}")
        raise upstream_error(e) from e

    return deleted
