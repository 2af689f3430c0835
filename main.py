from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Core
from core.config import settings
from core.config_validator import validate_config_on_startup
from core.errors import BadRequest, missing_fields_error
from core.logging_config import logger
from core.rate_limiter import RateLimitMiddleware, SlidingWindowRateLimiter
from core.security_headers import SecurityHeadersMiddleware

# Routers
from routers import ALL_ROUTERS


# -------------------------------------------------
# Validation error → 400 body
# -------------------------------------------------
def _field_name(error: Dict[str, Any]) -> str:
    loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    return ".".join(loc)


def _is_missing(error: Dict[str, Any]) -> bool:
    return error.get("type") in ("missing", "string_too_short") or error.get("input") in (None, "")


def validation_error_response(errors: List[Dict[str, Any]]) -> BadRequest:
    named = [e for e in errors if _field_name(e)]
    if not named:
        # The body itself is absent or not JSON
        return BadRequest("Missing or invalid request body")

    missing = [_field_name(e) for e in named if _is_missing(e)]
    if missing:
        return missing_fields_error(missing)

    invalid = [_field_name(e) for e in named]
    if len(invalid) == 1:
        return BadRequest(f"Invalid {invalid[0]}")
    return BadRequest("Invalid request fields", fields=invalid)


# -------------------------------------------------
# Create the Application
# -------------------------------------------------
def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="SocietyPro API: privileged account management for residential societies",
    )

    # -------------------------------------------------
    # Middleware (last added runs first)
    # -------------------------------------------------
    limiter = SlidingWindowRateLimiter(
        max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
        window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
    )
    app.state.rate_limiter = limiter

    app.add_middleware(RateLimitMiddleware, limiter=limiter, trust_proxy=settings.TRUST_PROXY)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.FRONTEND_ORIGIN.rstrip("/")],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # -------------------------------------------------
    # Startup logging
    # -------------------------------------------------
    @app.on_event("startup")
    async def on_startup():
        logger.info(f"🚀 Starting {settings.PROJECT_NAME} ({settings.ENV})")
        validate_config_on_startup()
        for route in app.routes:
            methods = ",".join(sorted(getattr(route, "methods", None) or []))
            logger.debug(f"➡️ {methods:10s} {getattr(route, 'path', '')}")

    # -------------------------------------------------
    # Error handling
    # Every error body carries an "error" key.
    # -------------------------------------------------
    @app.exception_handler(StarletteHTTPException)
    async def handle_http(request: Request, exc: StarletteHTTPException):
        content = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
        if exc.status_code in (401, 403, 500):
            logger.warning(
                f"HTTP {exc.status_code} at {request.url.path}: {content.get('error')}"
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=content,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation(request: Request, exc: RequestValidationError):
        err = validation_error_response(list(exc.errors()))
        return JSONResponse(status_code=err.status_code, content=err.detail)

    @app.exception_handler(Exception)
    async def handle_unhandled(request: Request, exc: Exception):
        logger.error("Unhandled error at %s", request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
        )

    # -------------------------------------------------
    # Register Routers
    # -------------------------------------------------
    for router in ALL_ROUTERS:
        app.include_router(router)

    return app


# Create the global FastAPI instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT)
