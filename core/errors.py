# core/errors.py

from typing import Any, Dict, List, Optional

from fastapi import HTTPException, status


# ============================================================
# Error taxonomy
# Every error's `detail` is the JSON body sent to the client,
# always carrying an "error" key.
# ============================================================
class ApiError(HTTPException):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        error: str,
        details: Optional[str] = None,
        hint: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        **extra: Any,
    ):
        body: Dict[str, Any] = {"error": error}
        if details is not None:
            body["details"] = details
        if hint is not None:
            body["hint"] = hint
        body.update(extra)
        super().__init__(status_code=self.status_code, detail=body, headers=headers)

    @property
    def error(self) -> str:
        return self.detail["error"]


class BadRequest(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class Unauthorized(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, error: str = "Unauthorized", **kwargs: Any):
        kwargs.setdefault("headers", {"WWW-Authenticate": "Bearer"})
        super().__init__(error, **kwargs)


class Forbidden(ApiError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class UpstreamError(ApiError):
    """Supabase or Resend answered, and the answer was a failure."""


class InternalError(ApiError):
    """Something unexpected, e.g. the upstream could not be reached at all."""


# ============================================================
# Supabase error helpers
# ============================================================
def extract_supabase_error(error: Exception) -> str:
    """
    Safely extract readable details from Supabase Python client errors.
    Handles:
      • PostgREST errors (APIError.message)
      • GoTrue (Auth) errors (AuthApiError.message)
      • Generic Python exceptions
    """
    message = getattr(error, "message", None)
    if message:
        return str(message)

    if error.args:
        return str(error.args[0])

    return str(error) or error.__class__.__name__


def is_not_found_error(error: Exception) -> bool:
    """
    True when GoTrue / PostgREST reported the target as missing
    (HTTP 404 status, or a "not found" message).
    """
    if getattr(error, "status", None) == 404:
        return True
    return "not found" in extract_supabase_error(error).lower()


def upstream_error(error: Exception, operation: Optional[str] = None) -> UpstreamError:
    """
    Wrap a Supabase failure as an UpstreamError carrying the store's message.
    Returns (doesn't raise) so callers can `raise upstream_error(e) from e`.
    """
    message = extract_supabase_error(error)
    if operation:
        return UpstreamError(message, details=operation)
    return UpstreamError(message)


# ============================================================
# Request validation → 400
# ============================================================
def missing_fields_error(fields: List[str]) -> BadRequest:
    if len(fields) == 1:
        return BadRequest(f"Missing {fields[0]}")
    return BadRequest("Missing required fields", fields=fields)
