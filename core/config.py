from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "SocietyPro API"
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"
    PORT: int = Field(3001, description="Listen port when started with `python main.py`")

    # -------------------------------------------------
    # Frontend (single allowed CORS origin)
    # -------------------------------------------------
    FRONTEND_ORIGIN: str = "http://localhost:5173"
    LOGIN_URL: str = "http://localhost:5173"

    # -------------------------------------------------
    # Supabase (Auth + Postgres)
    # Empty defaults do not fail startup; Supabase rejects
    # the calls later instead.
    # -------------------------------------------------
    SUPABASE_URL: str = ""
    SUPABASE_SERVICE_ROLE_KEY: str = ""

    # -------------------------------------------------
    # Resend (transactional email)
    # -------------------------------------------------
    RESEND_API_KEY: str = ""
    EMAIL_FROM_ADDRESS: str = "SocietyPro <onboarding@resend.dev>"

    # -------------------------------------------------
    # Rate limiting (sliding window per client)
    # -------------------------------------------------
    RATE_LIMIT_MAX_REQUESTS: int = 100
    RATE_LIMIT_WINDOW_SECONDS: int = 15 * 60
    # Key clients on the first X-Forwarded-For hop. Only enable behind a
    # proxy that overwrites the header.
    TRUST_PROXY: bool = False

    # -------------------------------------------------
    # Provisioning
    # -------------------------------------------------
    # When False, create-resident / create-watchman / send-email
    # accept unauthenticated callers (legacy server behaviour).
    REQUIRE_ADMIN_FOR_MEMBER_PROVISIONING: bool = True

    # Used as the society admin's first password when the
    # society registered without a contact number.
    DEFAULT_ADMIN_TEMP_PASSWORD: str = "Civora123"

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True


# Instantiate settings
settings = Settings()
