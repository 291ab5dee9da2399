"""Link dispatch - issue a portal token and email it to the client."""

import asyncio
from collections.abc import Callable

from src.portal.core.exceptions import InternalError
from src.portal.core.logging import get_logger
from src.portal.core.notifications import send_portal_link_email
from src.portal.models.enums import TokenSource
from src.portal.models.token import PortalToken
from src.portal.repositories import PortalBrandingRepository
from src.portal.services.token_service import PortalTokenService

logger = get_logger(__name__)

DEFAULT_COMPANY_NAME = "Your Company"

EmailSender = Callable[..., bool]


class PortalLinkService:
    """Issues a token and hands the rendered link to the email collaborator."""

    def __init__(
        self,
        token_service: PortalTokenService,
        branding_repo: PortalBrandingRepository,
        email_sender: EmailSender = send_portal_link_email,
    ):
        self.token_service = token_service
        self.branding_repo = branding_repo
        self.email_sender = email_sender

    async def send_link(
        self,
        company_id: str,
        client_id: str,
        email: str,
        company_name: str | None = None,
        source: TokenSource = TokenSource.SELF_SERVICE,
    ) -> PortalToken:
        """Create a token for the client and email the portal link.

        The token stays valid if the email fails; the caller can retry and
        earlier links keep working.
        """
        token, secret = await self.token_service.create_token(
            company_id, client_id, email, source=source
        )
        branding = await self.branding_repo.get_for_company(company_id)

        sent = await asyncio.to_thread(
            self.email_sender,
            to=token.email,
            token=secret,
            company_name=company_name or DEFAULT_COMPANY_NAME,
            accent_color=branding.accent_color,
            logo_url=branding.logo_url,
        )
        if not sent:
            logger.error("Portal link email failed", token_id=str(token.id))
            raise InternalError("Failed to send portal link")
        return token
