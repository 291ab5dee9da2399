"""Estimate approval flow - client decisions on pending estimates."""

from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.portal.core.exceptions import ConflictError, PersistenceError
from src.portal.core.logging import get_logger
from src.portal.models.base import utc_now
from src.portal.models.documents import Estimate
from src.portal.models.enums import EstimateStatus
from src.portal.repositories import EstimateRepository
from src.portal.schemas.session import PortalSession
from src.portal.services.activity_service import ActivityService
from src.portal.services.ownership import fetch_for_session

logger = get_logger(__name__)


class EstimateService:
    """One-way transitions out of PENDING, made by the owning client.

    The pre-check gives a fast, clear answer; the conditional UPDATE is
    what actually guarantees that only one concurrent decision wins.
    """

    def __init__(
        self,
        estimate_repo: EstimateRepository,
        session: AsyncSession,
        activity: ActivityService | None = None,
    ):
        self.estimate_repo = estimate_repo
        self.session = session
        self.activity = activity

    async def approve(self, estimate_id: UUID, portal_session: PortalSession) -> Estimate:
        """Move a pending estimate to APPROVED, recording the client as approver."""
        return await self._decide(
            estimate_id,
            portal_session,
            to_status=EstimateStatus.APPROVED,
            action="approve",
            approved_at=utc_now(),
            approved_by=portal_session.client_id,
        )

    async def decline(
        self,
        estimate_id: UUID,
        portal_session: PortalSession,
        reason: str | None = None,
    ) -> Estimate:
        """Move a pending estimate to REJECTED with an optional reason."""
        return await self._decide(
            estimate_id,
            portal_session,
            to_status=EstimateStatus.REJECTED,
            action="decline",
            declined_at=utc_now(),
            decline_reason=reason,
        )

    async def _decide(
        self,
        estimate_id: UUID,
        portal_session: PortalSession,
        *,
        to_status: EstimateStatus,
        action: str,
        **values: Any,
    ) -> Estimate:
        estimate = await fetch_for_session(self.estimate_repo, estimate_id, portal_session)
        conflict = ConflictError(f"Cannot {action} estimate in its current state")

        if estimate.status != EstimateStatus.PENDING.value:
            logger.info(
                "Estimate decision conflict",
                action=action,
                estimate_id=str(estimate_id),
                status=estimate.status,
            )
            raise conflict

        try:
            transitioned = await self.estimate_repo.transition_status(
                estimate_id,
                company_id=portal_session.company_id,
                client_id=portal_session.client_id,
                from_status=EstimateStatus.PENDING,
                to_status=to_status,
                **values,
            )
            if not transitioned:
                await self.session.rollback()
                logger.info(
                    "Estimate decision conflict",
                    action=action,
                    estimate_id=str(estimate_id),
                    status="changed concurrently",
                )
                raise conflict
            await self.session.commit()
            await self.session.refresh(estimate)
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to update estimate",
                action=action,
                estimate_id=str(estimate_id),
                error=str(e),
            )
            raise PersistenceError(f"Failed to {action} estimate") from e

        logger.info(
            f"Estimate {to_status.value}",
            estimate_id=str(estimate_id),
            client_id=portal_session.client_id,
        )
        await self._record_decision(portal_session, estimate, to_status)
        return estimate

    async def _record_decision(
        self, portal_session: PortalSession, estimate: Estimate, to_status: EstimateStatus
    ) -> None:
        if self.activity is None:
            return
        if to_status is EstimateStatus.APPROVED:
            await self.activity.estimate_approved(portal_session, estimate)
        else:
            await self.activity.estimate_declined(
                portal_session, estimate, estimate.decline_reason
            )
