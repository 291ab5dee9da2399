"""Repositories for messages, line-item questions and the activity timeline."""

from collections.abc import Iterable
from typing import Any
from uuid import UUID

from sqlalchemy import func, update
from sqlmodel import col, select

from src.portal.models.base import utc_now
from src.portal.models.engagement import (
    LineItemAnswer,
    LineItemQuestion,
    PortalActivity,
    PortalMessage,
)
from src.portal.models.enums import MessageSender
from src.portal.repositories.base import BaseRepository


class PortalMessageRepository(BaseRepository[PortalMessage]):
    model = PortalMessage

    async def list_for_client(
        self,
        company_id: str,
        client_id: str,
        *,
        limit: int = 50,
        offset: int = 0,
        project_id: UUID | None = None,
        estimate_id: UUID | None = None,
        invoice_id: UUID | None = None,
    ) -> list[PortalMessage]:
        """List one page of a client's conversation, newest first.

        Optional record filters narrow the page to messages about that record.
        """
        query = select(PortalMessage).where(
            PortalMessage.company_id == company_id,
            PortalMessage.client_id == client_id,
        )
        if project_id:
            query = query.where(PortalMessage.project_id == project_id)
        if estimate_id:
            query = query.where(PortalMessage.estimate_id == estimate_id)
        if invoice_id:
            query = query.where(PortalMessage.invoice_id == invoice_id)

        result = await self.session.execute(
            query.order_by(col(PortalMessage.created_at).desc(), col(PortalMessage.id).desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all())

    def _unread_from_company(self, company_id: str, client_id: str) -> list[Any]:
        return [
            PortalMessage.company_id == company_id,
            PortalMessage.client_id == client_id,
            PortalMessage.sender_type == MessageSender.COMPANY.value,
            col(PortalMessage.read_at).is_(None),
        ]

    async def count_unread(self, company_id: str, client_id: str) -> int:
        """Count company messages the client has not read yet."""
        result = await self.session.execute(
            select(func.count())
            .select_from(PortalMessage)
            .where(*self._unread_from_company(company_id, client_id))
        )
        return int(result.scalar_one())

    async def mark_read(self, company_id: str, client_id: str) -> int:
        """Mark every unread company message to this client as read."""
        stmt = (
            update(PortalMessage)
            .where(*self._unread_from_company(company_id, client_id))
            .values(read_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0  # type: ignore[attr-defined]


class LineItemQuestionRepository(BaseRepository[LineItemQuestion]):
    model = LineItemQuestion

    async def list_for_estimate(self, company_id: str, estimate_id: UUID) -> list[LineItemQuestion]:
        result = await self.session.execute(
            select(LineItemQuestion)
            .where(
                LineItemQuestion.company_id == company_id,
                LineItemQuestion.estimate_id == estimate_id,
            )
            .order_by(
                col(LineItemQuestion.line_item_id),
                col(LineItemQuestion.sort_order),
            )
        )
        return list(result.scalars().all())

    async def estimates_with_unanswered(
        self, estimate_ids: Iterable[UUID], client_id: str
    ) -> set[UUID]:
        """Return the estimates among these that have a question the client has not answered."""
        ids = list(estimate_ids)
        if not ids:
            return set()
        answered = select(LineItemAnswer.question_id).where(LineItemAnswer.client_id == client_id)
        result = await self.session.execute(
            select(LineItemQuestion.estimate_id)
            .where(
                col(LineItemQuestion.estimate_id).in_(ids),
                col(LineItemQuestion.id).not_in(answered),
            )
            .distinct()
        )
        return set(result.scalars().all())


class LineItemAnswerRepository(BaseRepository[LineItemAnswer]):
    model = LineItemAnswer

    async def list_for_questions(
        self, question_ids: Iterable[UUID], client_id: str
    ) -> list[LineItemAnswer]:
        ids = list(question_ids)
        if not ids:
            return []
        result = await self.session.execute(
            select(LineItemAnswer)
            .where(col(LineItemAnswer.question_id).in_(ids), LineItemAnswer.client_id == client_id)
            .order_by(col(LineItemAnswer.answered_at))
        )
        return list(result.scalars().all())


class PortalActivityRepository(BaseRepository[PortalActivity]):
    model = PortalActivity
