"""Email client using Resend API."""

import html
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError

import resend

from src.portal.core.config import get_settings
from src.portal.core.logging import get_logger
from src.portal.models.token import DEFAULT_ACCENT_COLOR

logger = get_logger(__name__)

# Thread pool for email sending with timeout support
_email_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="email_sender")

_BODY_STYLE = (
    "font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; "
    "line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;"
)
_MUTED_STYLE = "color: #666; font-size: 14px;"


def build_portal_url(token: str) -> str:
    """Compose the link a client follows to open their portal."""
    settings = get_settings()
    return f"{settings.app_url.rstrip('/')}/portal/{token}"


def send_portal_link_email(
    to: str,
    token: str,
    company_name: str,
    accent_color: str = DEFAULT_ACCENT_COLOR,
    logo_url: str | None = None,
) -> bool:
    """Send a portal access link to a client.

    Args:
        to: Recipient email address
        token: Portal token (plaintext, included in URL)
        company_name: Name of the business granting access
        accent_color: Brand colour for the call-to-action button
        logo_url: Optional company logo shown above the heading

    Returns:
        True if email was sent (or logged in dev mode), False on error
    """
    settings = get_settings()
    portal_url = build_portal_url(token)

    if not settings.resend_api_key:
        # Dev mode: log that the email was skipped instead of sending
        logger.warning(
            "RESEND_API_KEY not set - email not sent",
            to=to,
            email_type="portal_link",
        )
        return True

    resend.api_key = settings.resend_api_key

    def _send() -> None:
        resend.Emails.send(
            {
                "from": f"{company_name} <{settings.email_from}>",
                "to": [to],
                "subject": f"Access your {company_name} portal",
                "html": _get_portal_link_email_html(
                    company_name, portal_url, accent_color, logo_url
                ),
            }
        )

    try:
        # Use thread pool with timeout to prevent hanging on slow API responses
        future = _email_executor.submit(_send)
        future.result(timeout=settings.email_send_timeout_seconds)
        logger.info("Portal link email sent", to=to)
        return True
    except FuturesTimeoutError:
        logger.error("Email send timed out", to=to, timeout=settings.email_send_timeout_seconds)
        return False
    except Exception as e:
        logger.error("Failed to send portal link email", to=to, error=str(e))
        return False


def _get_portal_link_email_html(
    company_name: str,
    portal_url: str,
    accent_color: str,
    logo_url: str | None,
) -> str:
    """Generate HTML content for the portal link email."""
    settings = get_settings()
    safe_company_name = html.escape(company_name)
    safe_accent = html.escape(accent_color)
    button_style = (
        f"background-color: {safe_accent}; color: white; padding: 12px 24px; "
        "text-decoration: none; border-radius: 6px; display: inline-block; font-weight: 500;"
    )
    logo = (
        f'<img src="{html.escape(logo_url)}" alt="{safe_company_name}" '
        'style="max-height: 48px; margin-bottom: 16px;">'
        if logo_url
        else ""
    )
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="{_BODY_STYLE}">
    {logo}
    <h1 style="color: {safe_accent}; margin-bottom: 24px;">{safe_company_name}</h1>
    <p>You have been given access to your client portal, where you can review
    estimates, pay invoices and follow your projects.</p>
    <p style="margin: 32px 0;">
        <a href="{portal_url}" style="{button_style}">Open Portal</a>
    </p>
    <p style="{_MUTED_STYLE}">
        Or copy and paste this link into your browser:<br>
        <a href="{portal_url}" style="color: {safe_accent}; word-break: break-all;">{portal_url}</a>
    </p>
    <p style="{_MUTED_STYLE} margin-top: 32px;">
        This link will expire in {settings.portal_token_expire_days} days. If you weren't
        expecting it, you can safely ignore this email.
    </p>
</body>
</html>"""
