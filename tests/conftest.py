# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import Mock
from typing import Generator

from core.config import settings
from core.notifications import EmailSender, get_email_sender
from core.supabase_client import get_supabase_client
from main import create_app
from tests.fake_supabase import FakeSupabase


@pytest.fixture
def store() -> FakeSupabase:
    """In-memory Supabase (auth + tables)."""
    return FakeSupabase()


@pytest.fixture
def sender():
    """Email sender that records calls instead of hitting Resend."""
    mock_sender = Mock(spec=EmailSender)
    mock_sender.send_credentials_email.return_value = {"id": "email-123"}
    return mock_sender


@pytest.fixture
def society(store):
    return store.seed_row(
        "societies",
        name="Green Meadows",
        address="12 Park Road",
        contact_number=" 9876543210 ",
        admin_name="Asha Rao",
        admin_email="asha@greenmeadows.in",
        status="approved",
    )


@pytest.fixture
def admin(store, society):
    """An admin user with a profile; returns (user_id, token)."""
    return store.seed_user("admin@greenmeadows.in", role="admin", society_id=society["id"])


@pytest.fixture
def admin_headers(admin):
    return {"Authorization": f"Bearer {admin[1]}"}


@pytest.fixture(scope="function")
def app(store, sender):
    """Create a test FastAPI application instance."""
    application = create_app()
    application.dependency_overrides[get_supabase_client] = lambda: store
    application.dependency_overrides[get_email_sender] = lambda: sender
    yield application
    application.dependency_overrides = {}


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def ungated(monkeypatch):
    """Legacy mode: member provisioning endpoints without the admin check."""
    monkeypatch.setattr(settings, "REQUIRE_ADMIN_FOR_MEMBER_PROVISIONING", False)
