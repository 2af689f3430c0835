# core/config_validator.py

from typing import List
from core.config import settings
from core.logging_config import logger


def validate_required_config() -> List[str]:
    """
    Return the credentials the service needs but does not have.
    """
    missing = []

    if not settings.SUPABASE_URL:
        missing.append("SUPABASE_URL")
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        missing.append("SUPABASE_SERVICE_ROLE_KEY")
    if not settings.RESEND_API_KEY:
        missing.append("RESEND_API_KEY")

    return missing


def validate_config_on_startup() -> List[str]:
    """
    Log a warning for every missing credential.

    Never raises: an unconfigured service still boots and every
    Supabase / Resend call fails with an upstream auth error instead.
    """
    missing = validate_required_config()

    for name in missing:
        logger.warning(f"Configuration missing: {name} (upstream calls will fail)")

    if not missing:
        logger.info("Configuration validation passed")

    return missing
