# services/approval_workflow.py

"""
Approval workflow: pending society / resident / watchman → live account.

Each approval is a chain of independent calls with no rollback:

    society:   status=approved → create admin identity → credentials email
    member:    create identity → request status=approved → credentials email

(the two orders mirror the executive and admin dashboards respectively).
An email failure is reported back but never undoes the approval, so
"approved but never notified" is a normal end state.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from pydantic import ValidationError
from supabase import Client

from core.config import settings
from core.errors import BadRequest, NotFound, extract_supabase_error, upstream_error
from core.logging_config import logger
from core.notifications import EmailSender
from models.enums import ProfileRole, RequestStatus, SocietyStatus
from models.provisioning import AdminCreate, ResidentCreate, WatchmanCreate
from services.identity_service import create_identity


MEMBER_PAYLOADS = {
    ProfileRole.resident: ResidentCreate,
    ProfileRole.watchman: WatchmanCreate,
}


@dataclass
class ApprovalResult:
    user_id: str
    email_sent: bool
    email_error: Optional[str] = None

    def as_response(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "success": True,
            "userId": self.user_id,
            "emailSent": self.email_sent,
        }
        if self.email_error:
            body["emailError"] = self.email_error
        return body


# -----------------------------------------------------
# Helpers
# -----------------------------------------------------
def _get_row(client: Client, table: str, row_id: str, label: str) -> Dict[str, Any]:
    try:
        result = (
            client.table(table)
            .select("*")
            .eq("id", row_id)
            .maybe_single()
            .execute()
        )
    except Exception as e:
        raise upstream_error(e) from e

    row = result.data if result else None
    if not row:
        raise NotFound(f"{label} not found")
    return row


def _set_status(client: Client, table: str, row_id: str, status: str) -> None:
    client.table(table).update({"status": status}).eq("id", row_id).execute()


def _send_credentials(sender: EmailSender, user_id: str, to: str, name: str, temp_password: str) -> ApprovalResult:
    """Best effort: a failed send is recorded on the result, never raised."""
    try:
        sender.send_credentials_email(to, name, temp_password)
    except Exception as e:
        message = getattr(e, "message", None) or str(e)
        logger.warning(f"Credentials email to {to} failed (account stays approved): {message}")
        return ApprovalResult(user_id=user_id, email_sent=False, email_error=message)
    return ApprovalResult(user_id=user_id, email_sent=True)


# -----------------------------------------------------
# SOCIETY
# -----------------------------------------------------
def approve_society(client: Client, sender: EmailSender, society_id: str) -> ApprovalResult:
    society = _get_row(client, "societies", society_id, "Society")

    if society.get("status") != SocietyStatus.pending.value:
        raise BadRequest("Society already processed")

    try:
        _set_status(client, "societies", society_id, SocietyStatus.approved.value)
    except Exception as e:
        raise upstream_error(e) from e

    temp_password = (society.get("contact_number") or settings.DEFAULT_ADMIN_TEMP_PASSWORD).strip()

    try:
        payload = AdminCreate(
            email=society.get("admin_email"),
            password=temp_password,
            admin_name=society.get("admin_name"),
            society_id=society_id,
        )
    except ValidationError as e:
        raise BadRequest("Society record is incomplete", details=str(e)) from e

    # Society is already approved; a failure here leaves it approved
    # with no admin account.
    user_id = create_identity(client, payload)

    result = _send_credentials(sender, user_id, payload.email, payload.display_name, temp_password)
    logger.info(f"Society {society_id} approved; admin {user_id} (email sent: {result.email_sent})")
    return result


def reject_society(client: Client, society_id: str) -> None:
    society = _get_row(client, "societies", society_id, "Society")

    if society.get("status") != SocietyStatus.pending.value:
        raise BadRequest("Society already processed")

    try:
        _set_status(client, "societies", society_id, SocietyStatus.rejected.value)
    except Exception as e:
        raise upstream_error(e) from e

    logger.info(f"Society {society_id} rejected")


# -----------------------------------------------------
# RESIDENT / WATCHMAN
# -----------------------------------------------------
def approve_member_request(
    client: Client,
    sender: EmailSender,
    role: ProfileRole,
    request_id: str,
) -> ApprovalResult:
    table = role.request_table
    payload_cls = MEMBER_PAYLOADS.get(role)
    if not table or payload_cls is None:
        raise BadRequest(f"Role {role.value} has no request table")

    request = _get_row(client, table, request_id, "Request")

    if request.get("status") != RequestStatus.pending.value:
        raise BadRequest("Request already processed")

    temp_password = (request.get("phone_number") or "").strip()

    try:
        payload = payload_cls(**{**request, "password": temp_password})
    except ValidationError as e:
        raise BadRequest("Request record is incomplete", details=str(e)) from e

    user_id = create_identity(client, payload)

    try:
        _set_status(client, table, request_id, RequestStatus.approved.value)
    except Exception as e:
        logger.error(f"Could not mark {table} {request_id} approved: {extract_supabase_error(e)}")

    result = _send_credentials(sender, user_id, payload.email, payload.display_name, temp_password)
    logger.info(f"{role.value} request {request_id} approved; user {user_id} (email sent: {result.email_sent})")
    return result
