# core/supabase_client.py

from functools import lru_cache
from typing import Optional

from supabase import create_client, Client

from core.config import settings
from core.errors import InternalError
from core.logging_config import logger


# Tables the health probe touches
PROBE_TABLES = ["profiles", "societies", "resident_requests", "watchman_requests"]


# ============================================================
# Supabase Client Factory (ALWAYS service role)
# ============================================================
@lru_cache(maxsize=1)
def create_admin_client() -> Optional[Client]:
    """
    Builds the process-wide Supabase client with the SERVICE ROLE KEY.
    REQUIRED for:
        - auth.admin.create_user / auth.admin.delete_user
        - auth.get_user (bearer token verification)
        - unrestricted read/write on profiles, societies and request tables

    Built once and cached; never exposed to the frontend.
    """
    supabase_url = settings.SUPABASE_URL
    supabase_key = settings.SUPABASE_SERVICE_ROLE_KEY

    if not supabase_url or not supabase_key:
        logger.error("Missing Supabase credentials")
        logger.error(f"   URL: {supabase_url or 'MISSING'}")
        logger.error(f"   SERVICE ROLE KEY: {'SET' if supabase_key else 'MISSING'}")
        return None

    try:
        return create_client(supabase_url, supabase_key)
    except Exception as e:
        logger.error(f"Supabase Init Error: {e}", exc_info=True)
        return None


# ============================================================
# FastAPI dependency
# ============================================================
def get_supabase_client() -> Client:
    client = create_admin_client()
    if client is None:
        raise InternalError("Supabase client not configured")
    return client


# ============================================================
# Ping Supabase for health checks
# ============================================================
def ping_supabase(client: Optional[Client]) -> dict:
    """
    Simple connectivity check.
    Only touches public tables, never auth.
    """
    if client is None:
        return {"service": "Supabase", "status": "not_configured"}

    results = {}
    healthy = True

    for t in PROBE_TABLES:
        try:
            res = client.table(t).select("id").limit(1).execute()
            results[t] = {"status": "ok", "rows_found": len(res.data or [])}
        except Exception as err:
            healthy = False
            results[t] = {"status": "error", "detail": str(err)}

    return {
        "service": "Supabase",
        "status": "ok" if healthy else "degraded",
        "tables": results,
    }
