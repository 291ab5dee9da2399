"""Tests for portal log context binding."""

import pytest
import structlog
from structlog.testing import CapturingLogger

from src.portal.core.config import get_settings
from src.portal.core.logging import (
    bind_portal_context,
    bind_request_context,
    clear_request_context,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def capturing_logger():
    """Route structlog output to a capturing logger for the test."""
    cap_logger = CapturingLogger()
    old_config = structlog.get_config()

    structlog.configure(
        processors=[structlog.contextvars.merge_contextvars],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=lambda *args, **kwargs: cap_logger,
        cache_logger_on_first_use=False,
    )

    clear_request_context()
    yield cap_logger
    clear_request_context()
    structlog.configure(**old_config)


def test_bind_request_context(capturing_logger):
    bind_request_context("req-123")
    structlog.get_logger().info("test message")

    assert capturing_logger.calls[0].kwargs["request_id"] == "req-123"


def test_bind_request_context_ignores_none(capturing_logger):
    bind_request_context(None)
    structlog.get_logger().info("test message")

    assert "request_id" not in capturing_logger.calls[0].kwargs


def test_bind_portal_context_omits_email_by_default(capturing_logger):
    """Client emails stay out of logs unless explicitly enabled."""
    bind_portal_context(client_id="client-a", company_id="company-a", email="c@example.com")
    structlog.get_logger().info("test message")

    kwargs = capturing_logger.calls[0].kwargs
    assert kwargs["client_id"] == "client-a"
    assert kwargs["company_id"] == "company-a"
    assert "client_email" not in kwargs


def test_bind_portal_context_includes_email_when_enabled(capturing_logger, monkeypatch):
    monkeypatch.setattr(get_settings(), "log_client_emails", True)

    bind_portal_context(client_id="client-a", company_id="company-a", email="c@example.com")
    structlog.get_logger().info("test message")

    assert capturing_logger.calls[0].kwargs["client_email"] == "c@example.com"


def test_clear_request_context(capturing_logger):
    bind_request_context("req-123")
    bind_portal_context(client_id="client-a", company_id="company-a")
    clear_request_context()
    structlog.get_logger().info("test message")

    kwargs = capturing_logger.calls[0].kwargs
    assert "request_id" not in kwargs
    assert "client_id" not in kwargs
