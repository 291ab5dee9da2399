"""Root test fixtures shared across all test types.

This conftest contains fixtures that can be used by both unit and integration tests.
Database-specific fixtures are in tests/integration/conftest.py.
"""

import os

# Set APP_ENV to testing before any app imports to disable rate limiting
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DATABASE_SSL_MODE", "disable")
os.environ.setdefault("ADMIN_JWT_SECRET_KEY", "test-admin-secret-key-0123456789abcdef")
# httpx test clients talk plain http, so the cookie must not be Secure-only
os.environ.setdefault("PORTAL_COOKIE_SECURE", "false")
# Self-service links are off by default; the send-link tests exercise them
os.environ.setdefault("PORTAL_SELF_SERVICE_ENABLED", "true")

# ruff: noqa: E402 - Imports must be after env var setup
import pytest

from src.portal.core.config import get_settings
from src.portal.core.payments import PaymentGatewayError
from src.portal.schemas.session import PortalSession
from tests.helpers import make_portal_session
from tests.fakes import FakeEmailSender, FakePaymentGateway

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()

# --- Collaborator fakes ---


@pytest.fixture
def fake_gateway() -> FakePaymentGateway:
    return FakePaymentGateway()


@pytest.fixture
def failing_gateway() -> FakePaymentGateway:
    gateway = FakePaymentGateway()
    gateway.error = PaymentGatewayError("card_declined")
    return gateway


@pytest.fixture
def email_outbox() -> FakeEmailSender:
    return FakeEmailSender()


# --- Portal principals ---


@pytest.fixture
def portal_session() -> PortalSession:
    """Session for client-a of company-a."""
    return make_portal_session()
