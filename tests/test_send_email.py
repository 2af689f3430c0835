# tests/test_send_email.py

"""
Tests for /api/send-email and the Resend-backed EmailSender.
"""

from unittest.mock import patch

import pytest
import resend
from fastapi.testclient import TestClient

from core.email_utils import CREDENTIALS_SUBJECT, build_credentials_email
from core.notifications import SANDBOX_HINT, EmailDeliveryError, EmailSender, EmailTransportError, get_email_sender


BODY = {"to": "x@y.com", "name": "X", "tempPass": "abc123"}


def resend_error(message: str, error_type: str = "validation_error", code: int = 403) -> resend.exceptions.ResendError:
    return resend.exceptions.ResendError(
        code=code,
        error_type=error_type,
        message=message,
        suggested_action="",
    )


# ============================================================
# ENDPOINT
# ============================================================
def test_send_email_success(client: TestClient, sender, admin_headers):
    response = client.post("/api/send-email", json=BODY, headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": {"id": "email-123"}}
    sender.send_credentials_email.assert_called_once_with("x@y.com", "X", "abc123")


def test_send_email_twice_sends_twice(client: TestClient, sender, admin_headers):
    client.post("/api/send-email", json=BODY, headers=admin_headers)
    client.post("/api/send-email", json=BODY, headers=admin_headers)

    assert sender.send_credentials_email.call_count == 2


@pytest.mark.parametrize("field", ["to", "name", "tempPass"])
def test_send_email_missing_field(client: TestClient, sender, admin_headers, field):
    body = dict(BODY)
    del body[field]

    response = client.post("/api/send-email", json=body, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"] == f"Missing {field}"
    sender.send_credentials_email.assert_not_called()


def test_send_email_provider_rejection(client: TestClient, sender, admin_headers):
    sender.send_credentials_email.side_effect = EmailDeliveryError("You can only send testing emails to your own email address")

    response = client.post("/api/send-email", json=BODY, headers=admin_headers)

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Resend failed to send email"
    assert body["details"] == "You can only send testing emails to your own email address"
    assert body["hint"] == SANDBOX_HINT


def test_send_email_unreachable_sender(client: TestClient, sender, admin_headers):
    sender.send_credentials_email.side_effect = EmailTransportError("Failed to establish a new connection")

    response = client.post("/api/send-email", json=BODY, headers=admin_headers)

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Internal server error"
    assert "Failed to establish" in body["details"]
    assert "data" not in body
    assert "userId" not in body


def test_send_email_requires_admin_by_default(client: TestClient, sender):
    response = client.post("/api/send-email", json=BODY)

    assert response.status_code == 401
    sender.send_credentials_email.assert_not_called()


def test_send_email_ungated(client: TestClient, sender, ungated):
    response = client.post("/api/send-email", json=BODY)

    assert response.status_code == 200


# ============================================================
# SENDER
# ============================================================
def test_sender_submits_one_resend_email():
    email_sender = EmailSender(api_key="re_test", from_address="SocietyPro <noreply@greenmeadows.in>", login_url="https://app.example.com")

    with patch("core.notifications.resend.Emails.send", return_value={"id": "msg-1"}) as mock_send:
        result = email_sender.send_credentials_email("x@y.com", "X", "abc123")

    assert result == {"id": "msg-1"}
    params = mock_send.call_args.args[0]
    assert params["from"] == "SocietyPro <noreply@greenmeadows.in>"
    assert params["to"] == ["x@y.com"]
    assert params["subject"] == CREDENTIALS_SUBJECT
    assert "abc123" in params["html"]
    assert "https://app.example.com" in params["html"]


def test_sender_wraps_resend_errors():
    email_sender = EmailSender(api_key="re_test", from_address="a@b.com", login_url="http://localhost")

    with patch("core.notifications.resend.Emails.send", side_effect=resend_error("domain not verified")):
        with pytest.raises(EmailDeliveryError) as excinfo:
            email_sender.send_credentials_email("x@y.com", "X", "abc123")

    assert excinfo.value.message == "domain not verified"
    assert excinfo.value.hint == SANDBOX_HINT


def test_sender_separates_transport_errors():
    email_sender = EmailSender(api_key="re_test", from_address="a@b.com", login_url="http://localhost")
    refused = resend_error("[Errno 111] Connection refused", error_type="HttpClientError", code=500)

    with patch("core.notifications.resend.Emails.send", side_effect=refused):
        with pytest.raises(EmailTransportError):
            email_sender.send_credentials_email("x@y.com", "X", "abc123")


def test_unreachable_resend_is_internal_error(app, admin_headers, monkeypatch):
    """Real SDK call against a closed port: a network failure, not a rejection."""
    monkeypatch.setattr(resend, "api_url", "http://127.0.0.1:9")
    app.dependency_overrides[get_email_sender] = lambda: EmailSender(
        api_key="re_test", from_address="a@b.com", login_url="http://localhost"
    )

    with TestClient(app) as client:
        response = client.post("/api/send-email", json=BODY, headers=admin_headers)

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Internal server error"
    assert "hint" not in body


# ============================================================
# TEMPLATE
# ============================================================
def test_template_embeds_credentials():
    subject, html = build_credentials_email("x@y.com", "X", "abc123", "http://localhost:5173")

    assert subject == "Welcome to SocietyPro - Approval Granted"
    assert "Hello X, your account has been approved." in html
    assert "<strong>Username:</strong> x@y.com" in html
    assert "<strong>Password:</strong> abc123" in html
    assert 'href="http://localhost:5173"' in html


def test_template_escapes_html():
    _, html = build_credentials_email("x@y.com", "<script>alert(1)</script>", "a&b", "http://localhost")

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "a&amp;b" in html
