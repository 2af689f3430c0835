# routers/health.py

from fastapi import APIRouter

from core.config import settings
from core.supabase_client import create_admin_client, ping_supabase

router = APIRouter(tags=["Health"])


# -----------------------------------------------------
# GET /
# Liveness for Render / uptime monitors
# -----------------------------------------------------
@router.get("/", summary="API health check")
async def root():
    return {"status": "ok", "message": "SocietyPro API Server Running"}


# -----------------------------------------------------
# GET /health/db
# Checks Supabase connection + table queries
# No auth required
# -----------------------------------------------------
@router.get("/health/db", summary="Supabase / DB health check")
def health_db():
    """
    Verifies Supabase connectivity.
    - Reports "not_configured" when URL / service key are missing
    - Attempts to read one row from each application table
    - Returns row-count + error details per table

    Safe for external health monitors (no auth required).
    """
    status = ping_supabase(create_admin_client())
    return {
        "service": settings.PROJECT_NAME,
        "status": status.get("status", "unknown"),
        "details": status,
    }
