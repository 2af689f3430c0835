# routers/registration.py

from typing import Any, Dict

from fastapi import APIRouter, Depends
from supabase import Client

from core.errors import upstream_error
from core.logging_config import logger
from core.supabase_client import get_supabase_client
from models.enums import RequestStatus, SocietyStatus
from models.registration import (
    ResidentRegistration,
    SocietyRegistration,
    WatchmanRegistration,
)


router = APIRouter(
    prefix="/api",
    tags=["Registration"],
)


def _insert_pending(client: Client, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
    try:
        result = client.table(table).insert(row, returning="representation").execute()
    except Exception as e:
        raise upstream_error(e) from e

    created = (result.data or [{}])[0]
    logger.info(f"New {table} row {created.get('id')} for {row.get('email') or row.get('admin_email')}")
    return {"success": True, "id": created.get("id")}


# -----------------------------------------------------
# PUBLIC: Societies open for registration
# -----------------------------------------------------
@router.get("/societies/approved", summary="Public: Approved societies")
def list_approved_societies(client: Client = Depends(get_supabase_client)):
    try:
        result = (
            client.table("societies")
            .select("id, name")
            .eq("status", SocietyStatus.approved.value)
            .order("name")
            .execute()
        )
    except Exception as e:
        raise upstream_error(e) from e

    return {"success": True, "data": result.data or []}


# -----------------------------------------------------
# PUBLIC: Submit a society for executive review
# -----------------------------------------------------
@router.post("/register/society", summary="Public: Register a society")
def register_society(
    payload: SocietyRegistration,
    client: Client = Depends(get_supabase_client),
):
    row = {
        **payload.model_dump(),
        "status": SocietyStatus.pending.value,
    }
    return _insert_pending(client, "societies", row)


# -----------------------------------------------------
# PUBLIC: Resident access request
# -----------------------------------------------------
@router.post("/register/resident", summary="Public: Request resident access")
def register_resident(
    payload: ResidentRegistration,
    client: Client = Depends(get_supabase_client),
):
    row = {
        **payload.model_dump(),
        "status": RequestStatus.pending.value,
    }
    return _insert_pending(client, "resident_requests", row)


# -----------------------------------------------------
# PUBLIC: Watchman access request
# -----------------------------------------------------
@router.post("/register/watchman", summary="Public: Request watchman access")
def register_watchman(
    payload: WatchmanRegistration,
    client: Client = Depends(get_supabase_client),
):
    row = {
        **payload.model_dump(),
        "status": RequestStatus.pending.value,
    }
    return _insert_pending(client, "watchman_requests", row)
