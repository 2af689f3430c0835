# routers/admin.py

from fastapi import APIRouter, Depends
from supabase import Client

from core.supabase_client import get_supabase_client
from dependencies.auth import require_admin, require_admin_for_member_provisioning
from models.provisioning import (
    AdminCreate,
    CreateIdentityBase,
    DeleteSocietyRequest,
    DeleteUserRequest,
    ResidentCreate,
    WatchmanCreate,
)
from services import identity_service


router = APIRouter(
    prefix="/api",
    tags=["Admin"],
)


def _created(client: Client, payload: CreateIdentityBase) -> dict:
    user_id = identity_service.create_identity(client, payload)
    return {"success": True, "userId": user_id}


# -----------------------------------------------------
# 1️⃣ DELETE SOCIETY (+ every linked user)
# -----------------------------------------------------
@router.post(
    "/delete-society",
    summary="Admin: Delete a society and all of its users",
    dependencies=[Depends(require_admin)],
)
def delete_society(
    payload: DeleteSocietyRequest,
    client: Client = Depends(get_supabase_client),
):
    deleted = identity_service.delete_society(client, payload.society_id)
    return {"success": True, "deletedUsers": deleted}


# -----------------------------------------------------
# 2️⃣ DELETE USER (auth + profile + pending request)
# -----------------------------------------------------
@router.post(
    "/delete-user",
    summary="Admin: Delete a user (lenient, safe to retry)",
    dependencies=[Depends(require_admin)],
)
def delete_user(
    payload: DeleteUserRequest,
    client: Client = Depends(get_supabase_client),
):
    identity_service.delete_identity(client, payload.user_id, payload.email, payload.role)
    return {"success": True}


# -----------------------------------------------------
# 3️⃣ CREATE ADMIN (society approval)
# -----------------------------------------------------
@router.post(
    "/create-admin",
    summary="Admin: Create a society admin account",
    dependencies=[Depends(require_admin)],
)
def create_admin(
    payload: AdminCreate,
    client: Client = Depends(get_supabase_client),
):
    return _created(client, payload)


# -----------------------------------------------------
# 4️⃣ CREATE RESIDENT
# -----------------------------------------------------
@router.post(
    "/create-resident",
    summary="Create a resident account",
    dependencies=[Depends(require_admin_for_member_provisioning)],
)
def create_resident(
    payload: ResidentCreate,
    client: Client = Depends(get_supabase_client),
):
    return _created(client, payload)


# -----------------------------------------------------
# 5️⃣ CREATE WATCHMAN
# -----------------------------------------------------
@router.post(
    "/create-watchman",
    summary="Create a watchman account",
    dependencies=[Depends(require_admin_for_member_provisioning)],
)
def create_watchman(
    payload: WatchmanCreate,
    client: Client = Depends(get_supabase_client),
):
    return _created(client, payload)
