"""Client messaging - the conversation between a client and the company."""

from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.portal.core.exceptions import PersistenceError, PortalValidationError
from src.portal.core.logging import get_logger
from src.portal.models import MessageSender, PortalMessage
from src.portal.repositories import (
    EstimateRepository,
    InvoiceRepository,
    PortalMessageRepository,
    ProjectRepository,
)
from src.portal.schemas.session import PortalSession
from src.portal.services.activity_service import ActivityService
from src.portal.services.ownership import fetch_for_session

logger = get_logger(__name__)

EMPTY_MESSAGE = "Message content cannot be empty"


class MessageService:
    def __init__(
        self,
        message_repo: PortalMessageRepository,
        estimate_repo: EstimateRepository,
        invoice_repo: InvoiceRepository,
        project_repo: ProjectRepository,
        session: AsyncSession,
        activity: ActivityService | None = None,
    ):
        self.message_repo = message_repo
        self.estimate_repo = estimate_repo
        self.invoice_repo = invoice_repo
        self.project_repo = project_repo
        self.session = session
        self.activity = activity

    async def list_messages(
        self,
        portal_session: PortalSession,
        *,
        limit: int = 50,
        offset: int = 0,
        project_id: UUID | None = None,
        estimate_id: UUID | None = None,
        invoice_id: UUID | None = None,
    ) -> list[PortalMessage]:
        return await self.message_repo.list_for_client(
            portal_session.company_id,
            portal_session.client_id,
            limit=limit,
            offset=offset,
            project_id=project_id,
            estimate_id=estimate_id,
            invoice_id=invoice_id,
        )

    async def send_message(
        self,
        portal_session: PortalSession,
        content: str,
        *,
        project_id: UUID | None = None,
        estimate_id: UUID | None = None,
        invoice_id: UUID | None = None,
    ) -> PortalMessage:
        """Store a message from the client, signed with the session email.

        A message may point at a project, estimate or invoice; each one
        must pass the same ownership check as reading it directly.
        """
        content = content.strip()
        if not content:
            raise PortalValidationError(EMPTY_MESSAGE)

        if project_id is not None:
            await fetch_for_session(self.project_repo, project_id, portal_session)
        if estimate_id is not None:
            await fetch_for_session(self.estimate_repo, estimate_id, portal_session)
        if invoice_id is not None:
            await fetch_for_session(self.invoice_repo, invoice_id, portal_session)

        message = PortalMessage(
            company_id=portal_session.company_id,
            client_id=portal_session.client_id,
            project_id=project_id,
            estimate_id=estimate_id,
            invoice_id=invoice_id,
            sender_type=MessageSender.CLIENT.value,
            sender_name=portal_session.email,
            content=content,
        )
        try:
            self.message_repo.add(message)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Failed to store portal message", error=str(e))
            raise PersistenceError("Failed to send message") from e

        logger.info("Portal message sent", message_id=str(message.id))
        if self.activity is not None:
            await self.activity.message_sent(portal_session, message)
        return message

    async def mark_read(self, portal_session: PortalSession) -> int:
        """Mark the company's messages to this client as read. Returns how many changed."""
        try:
            updated = await self.message_repo.mark_read(
                portal_session.company_id, portal_session.client_id
            )
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Failed to mark portal messages read", error=str(e))
            raise PersistenceError("Failed to mark messages read") from e
        return updated
