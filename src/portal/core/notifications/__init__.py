"""Notification utilities - email."""

from src.portal.core.notifications.email import build_portal_url, send_portal_link_email

__all__ = [
    "build_portal_url",
    "send_portal_link_email",
]
