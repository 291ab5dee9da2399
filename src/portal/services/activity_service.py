"""Activity timeline - records what clients do in the portal."""

import contextlib
from decimal import Decimal
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.portal.core.logging import get_logger
from src.portal.models import ActivityType, Estimate, Invoice, PortalActivity, PortalMessage
from src.portal.repositories import PortalActivityRepository
from src.portal.schemas.session import PortalSession

logger = get_logger(__name__)

MESSAGE_PREVIEW_LENGTH = 200


class ActivityService:
    """Writes timeline entries on an isolated session.

    Fire-and-forget: a failed write is logged and never reaches the caller,
    and it cannot roll back the caller's transaction.
    """

    def __init__(self, activity_repo: PortalActivityRepository, session: AsyncSession):
        self.activity_repo = activity_repo
        self.session = session

    async def record(
        self,
        portal_session: PortalSession,
        activity_type: ActivityType,
        subject: str,
        *,
        content: str | None = None,
        estimate_id: UUID | None = None,
        invoice_id: UUID | None = None,
        project_id: UUID | None = None,
    ) -> PortalActivity | None:
        """Record an activity entry. Returns None if it could not be stored."""
        try:
            activity = PortalActivity(
                company_id=portal_session.company_id,
                client_id=portal_session.client_id,
                estimate_id=estimate_id,
                invoice_id=invoice_id,
                project_id=project_id,
                type=activity_type.value,
                subject=subject,
                content=content,
            )
            self.activity_repo.add(activity)
            await self.session.commit()

            logger.debug(
                "Portal activity recorded",
                activity_type=activity_type.value,
                estimate_id=str(estimate_id) if estimate_id else None,
                invoice_id=str(invoice_id) if invoice_id else None,
            )
            return activity

        except Exception as e:
            logger.warning(
                "Failed to record portal activity",
                activity_type=activity_type.value,
                error=str(e),
            )
            with contextlib.suppress(Exception):
                await self.session.rollback()
            return None

    async def estimate_viewed(self, portal_session: PortalSession, estimate: Estimate) -> None:
        await self.record(
            portal_session,
            ActivityType.ESTIMATE_VIEWED,
            f"Estimate #{estimate.estimate_number} viewed by client",
            estimate_id=estimate.id,
            project_id=estimate.project_id,
        )

    async def estimate_approved(self, portal_session: PortalSession, estimate: Estimate) -> None:
        await self.record(
            portal_session,
            ActivityType.ESTIMATE_APPROVED,
            f"Estimate #{estimate.estimate_number} approved by client",
            estimate_id=estimate.id,
            project_id=estimate.project_id,
        )

    async def estimate_declined(
        self, portal_session: PortalSession, estimate: Estimate, reason: str | None
    ) -> None:
        await self.record(
            portal_session,
            ActivityType.ESTIMATE_DECLINED,
            f"Estimate #{estimate.estimate_number} declined by client",
            content=f"Reason: {reason}" if reason else None,
            estimate_id=estimate.id,
            project_id=estimate.project_id,
        )

    async def questions_answered(
        self, portal_session: PortalSession, estimate: Estimate, count: int
    ) -> None:
        noun = "question" if count == 1 else "questions"
        await self.record(
            portal_session,
            ActivityType.QUESTIONS_ANSWERED,
            f"Client answered {count} {noun} on estimate #{estimate.estimate_number}",
            estimate_id=estimate.id,
            project_id=estimate.project_id,
        )

    async def payment_started(
        self, portal_session: PortalSession, invoice: Invoice, amount: Decimal
    ) -> None:
        await self.record(
            portal_session,
            ActivityType.PAYMENT_STARTED,
            f"Payment of ${amount:.2f} started for invoice #{invoice.invoice_number}",
            invoice_id=invoice.id,
            project_id=invoice.project_id,
        )

    async def message_sent(self, portal_session: PortalSession, message: PortalMessage) -> None:
        await self.record(
            portal_session,
            ActivityType.CLIENT_MESSAGE,
            "Client message via portal",
            content=message.content[:MESSAGE_PREVIEW_LENGTH],
            estimate_id=message.estimate_id,
            invoice_id=message.invoice_id,
            project_id=message.project_id,
        )
