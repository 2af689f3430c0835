# routers/email.py

from fastapi import APIRouter, Depends

from core.errors import InternalError, UpstreamError
from core.logging_config import logger
from core.notifications import EmailDeliveryError, EmailSender, get_email_sender
from dependencies.auth import require_admin_for_member_provisioning
from models.provisioning import SendEmailRequest


router = APIRouter(
    prefix="/api",
    tags=["Email"],
)


# -----------------------------------------------------
# SEND CREDENTIALS EMAIL
# One call = one email. No retry, no dedupe.
# -----------------------------------------------------
@router.post(
    "/send-email",
    summary="Send the approval / login credentials email",
    dependencies=[Depends(require_admin_for_member_provisioning)],
)
def send_email(
    payload: SendEmailRequest,
    sender: EmailSender = Depends(get_email_sender),
):
    logger.info(f"Attempting to send email to: {payload.to}")

    try:
        data = sender.send_credentials_email(payload.to, payload.name, payload.temp_pass)
    except EmailDeliveryError as e:
        raise UpstreamError(
            "Resend failed to send email",
            details=e.message,
            hint=e.hint,
        ) from e
    except Exception as e:
        logger.error(f"Backend error during email send to {payload.to}: {e}", exc_info=True)
        raise InternalError("Internal server error", details=str(e)) from e

    return {"success": True, "data": data}
