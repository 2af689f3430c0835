# routers/approvals.py

from fastapi import APIRouter, Depends, Query
from supabase import Client

from core.errors import upstream_error
from core.notifications import EmailSender, get_email_sender
from core.supabase_client import get_supabase_client
from dependencies.auth import require_admin
from models.enums import ProfileRole, RequestStatus
from services import approval_workflow


router = APIRouter(
    prefix="/api",
    tags=["Approvals"],
    dependencies=[Depends(require_admin)],
)


def _list_requests(client: Client, role: ProfileRole, society_id: str | None, status: RequestStatus):
    query = client.table(role.request_table).select("*").eq("status", status.value)
    if society_id:
        query = query.eq("society_id", society_id)

    try:
        result = query.order("created_at", desc=True).execute()
    except Exception as e:
        raise upstream_error(e) from e

    return {"success": True, "data": result.data or []}


# -----------------------------------------------------
# SOCIETIES (executive review)
# -----------------------------------------------------
@router.post("/societies/{society_id}/approve", summary="Approve a society and provision its admin")
def approve_society(
    society_id: str,
    client: Client = Depends(get_supabase_client),
    sender: EmailSender = Depends(get_email_sender),
):
    result = approval_workflow.approve_society(client, sender, society_id)
    return result.as_response()


@router.post("/societies/{society_id}/reject", summary="Reject a pending society")
def reject_society(
    society_id: str,
    client: Client = Depends(get_supabase_client),
):
    approval_workflow.reject_society(client, society_id)
    return {"success": True}


# -----------------------------------------------------
# RESIDENT REQUESTS
# -----------------------------------------------------
@router.get("/resident-requests", summary="List resident access requests")
def list_resident_requests(
    society_id: str | None = Query(None, alias="societyId"),
    status: RequestStatus = RequestStatus.pending,
    client: Client = Depends(get_supabase_client),
):
    return _list_requests(client, ProfileRole.resident, society_id, status)


@router.post("/resident-requests/{request_id}/approve", summary="Approve a resident request")
def approve_resident_request(
    request_id: str,
    client: Client = Depends(get_supabase_client),
    sender: EmailSender = Depends(get_email_sender),
):
    result = approval_workflow.approve_member_request(client, sender, ProfileRole.resident, request_id)
    return result.as_response()


# -----------------------------------------------------
# WATCHMAN REQUESTS
# -----------------------------------------------------
@router.get("/watchman-requests", summary="List watchman access requests")
def list_watchman_requests(
    society_id: str | None = Query(None, alias="societyId"),
    status: RequestStatus = RequestStatus.pending,
    client: Client = Depends(get_supabase_client),
):
    return _list_requests(client, ProfileRole.watchman, society_id, status)


@router.post("/watchman-requests/{request_id}/approve", summary="Approve a watchman request")
def approve_watchman_request(
    request_id: str,
    client: Client = Depends(get_supabase_client),
    sender: EmailSender = Depends(get_email_sender),
):
    result = approval_workflow.approve_member_request(client, sender, ProfileRole.watchman, request_id)
    return result.as_response()
