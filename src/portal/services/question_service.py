"""Line-item questions on estimates and the client's answers to them."""

from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.portal.core.exceptions import PersistenceError, PortalValidationError
from src.portal.core.logging import get_logger
from src.portal.models import LineItemAnswer, LineItemQuestion
from src.portal.models.base import utc_now
from src.portal.repositories import (
    EstimateRepository,
    LineItemAnswerRepository,
    LineItemQuestionRepository,
)
from src.portal.schemas.session import PortalSession
from src.portal.services.activity_service import ActivityService
from src.portal.services.ownership import fetch_for_session

logger = get_logger(__name__)


class QuestionService:
    """Every call checks ownership of the estimate before touching its questions."""

    def __init__(
        self,
        question_repo: LineItemQuestionRepository,
        answer_repo: LineItemAnswerRepository,
        estimate_repo: EstimateRepository,
        session: AsyncSession,
        activity: ActivityService | None = None,
    ):
        self.question_repo = question_repo
        self.answer_repo = answer_repo
        self.estimate_repo = estimate_repo
        self.session = session
        self.activity = activity

    async def get_questions(
        self, estimate_id: UUID, portal_session: PortalSession
    ) -> tuple[list[LineItemQuestion], list[LineItemAnswer]]:
        """Return the estimate's questions and the client's answers so far."""
        estimate = await fetch_for_session(self.estimate_repo, estimate_id, portal_session)
        questions = await self.question_repo.list_for_estimate(
            portal_session.company_id, estimate.id
        )
        answers = await self.answer_repo.list_for_questions(
            (q.id for q in questions), portal_session.client_id
        )
        return questions, answers

    async def submit_answers(
        self,
        estimate_id: UUID,
        answers: list[tuple[UUID, str]],
        portal_session: PortalSession,
    ) -> list[LineItemAnswer]:
        """Store (question_id, value) answers, replacing earlier ones.

        Every question must belong to this estimate. When a question
        appears twice, the last value wins.
        """
        estimate = await fetch_for_session(self.estimate_repo, estimate_id, portal_session)
        if not answers:
            raise PortalValidationError("At least one answer is required")

        questions = await self.question_repo.list_for_estimate(
            portal_session.company_id, estimate.id
        )
        known = {q.id for q in questions}
        values = dict(answers)
        if not values.keys() <= known:
            raise PortalValidationError("Question does not belong to this estimate")

        existing = {
            a.question_id: a
            for a in await self.answer_repo.list_for_questions(
                values.keys(), portal_session.client_id
            )
        }
        stored: list[LineItemAnswer] = []
        try:
            for question_id, value in values.items():
                answer = existing.get(question_id)
                if answer is None:
                    answer = LineItemAnswer(
                        question_id=question_id,
                        client_id=portal_session.client_id,
                        answer_value=value,
                    )
                    self.answer_repo.add(answer)
                else:
                    answer.answer_value = value
                    answer.answered_at = utc_now()
                stored.append(answer)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to store answers",
                estimate_id=str(estimate_id),
                error=str(e),
            )
            raise PersistenceError("Failed to submit answers") from e

        logger.info(
            "Estimate questions answered",
            estimate_id=str(estimate_id),
            count=len(stored),
        )
        if self.activity is not None:
            await self.activity.questions_answered(portal_session, estimate, len(stored))
        return stored
