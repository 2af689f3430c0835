# core/notifications.py

from functools import lru_cache
from typing import Any, Dict, Optional

import resend

from core.config import settings
from core.email_utils import build_credentials_email
from core.logging_config import logger


SANDBOX_HINT = (
    "If you are using a Resend trial account, you can ONLY send to your own "
    "registered email. To send to others, you must verify your domain in the "
    "Resend dashboard."
)


class EmailDeliveryError(Exception):
    """Resend received the request and refused it."""

    def __init__(self, message: str, hint: Optional[str] = SANDBOX_HINT):
        super().__init__(message)
        self.message = message
        self.hint = hint


class EmailTransportError(ConnectionError):
    """Resend could not be reached (DNS, refused connection, timeout)."""


# The SDK wraps transport failures in a ResendError with this type
HTTP_CLIENT_ERROR = "HttpClientError"


# -----------------------------------------------------
# 📧 Resend sender
# -----------------------------------------------------
class EmailSender:
    """
    Thin wrapper over the Resend SDK.

    One instance per process (see get_email_sender); the API key is
    set on the resend module once, at construction.

    No retries and no deduplication: every call submits one email.
    """

    def __init__(self, api_key: str, from_address: str, login_url: str):
        self.from_address = from_address
        self.login_url = login_url

        resend.api_key = api_key
        if not api_key:
            logger.warning("RESEND_API_KEY not set; every send will be rejected")

    def send_credentials_email(self, to: str, name: str, temp_password: str) -> Dict[str, Any]:
        """
        Submit the approval / credentials email.

        Returns Resend's response (``{"id": ...}``).
        Raises EmailDeliveryError when Resend rejects the message and
        EmailTransportError when Resend cannot be reached.
        """
        subject, html = build_credentials_email(to, name, temp_password, self.login_url)

        params: resend.Emails.SendParams = {
            "from": self.from_address,
            "to": [to],
            "subject": subject,
            "html": html,
        }

        logger.info(f"Sending credentials email to {to}")

        try:
            response = resend.Emails.send(params)
        except resend.exceptions.ResendError as e:
            message = getattr(e, "message", None) or str(e)
            if getattr(e, "error_type", None) == HTTP_CLIENT_ERROR:
                logger.error(f"Resend unreachable for {to}: {message}")
                raise EmailTransportError(message) from e
            logger.error(f"Resend API error for {to}: {message}")
            raise EmailDeliveryError(message) from e

        email_id = response.get("id") if isinstance(response, dict) else getattr(response, "id", None)
        logger.info(f"Email sent successfully: {email_id}")

        return dict(response) if isinstance(response, dict) else {"id": email_id}


@lru_cache(maxsize=1)
def get_email_sender() -> EmailSender:
    return EmailSender(
        api_key=settings.RESEND_API_KEY,
        from_address=settings.EMAIL_FROM_ADDRESS,
        login_url=settings.LOGIN_URL,
    )
