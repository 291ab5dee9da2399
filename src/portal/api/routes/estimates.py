"""Estimate endpoints - view, approve, decline, line-item questions."""

from uuid import UUID

from fastapi import APIRouter

from src.portal.api.dependencies import (
    EstimateServiceDep,
    PortalServiceDep,
    PortalSessionDep,
    QuestionServiceDep,
)
from src.portal.schemas import (
    AnswerRead,
    DeclineRequest,
    EstimateDetailRead,
    LineItemRead,
    QuestionRead,
    QuestionsResponse,
    SubmitAnswersRequest,
    SubmitAnswersResponse,
    SuccessResponse,
)

router = APIRouter(prefix="/estimates", tags=["portal-estimates"])


@router.get(
    "/{estimate_id}",
    response_model=EstimateDetailRead,
    summary="Get estimate",
    description="The estimate with its line items. The first view is recorded.",
    responses={
        403: {"description": "Estimate belongs to another client"},
        404: {"description": "Estimate not found"},
    },
)
async def get_estimate(
    estimate_id: UUID,
    portal_session: PortalSessionDep,
    service: PortalServiceDep,
) -> EstimateDetailRead:
    detail = await service.get_estimate_detail(estimate_id, portal_session)
    return EstimateDetailRead.model_validate(detail.estimate).model_copy(
        update={"line_items": [LineItemRead.model_validate(i) for i in detail.line_items]}
    )


@router.post(
    "/{estimate_id}/approve",
    response_model=SuccessResponse,
    summary="Approve estimate",
    responses={
        403: {"description": "Estimate belongs to another client"},
        404: {"description": "Estimate not found"},
        409: {"description": "Estimate is not awaiting a decision"},
    },
)
async def approve_estimate(
    estimate_id: UUID,
    portal_session: PortalSessionDep,
    service: EstimateServiceDep,
) -> SuccessResponse:
    await service.approve(estimate_id, portal_session)
    return SuccessResponse()


@router.post(
    "/{estimate_id}/decline",
    response_model=SuccessResponse,
    summary="Decline estimate",
    responses={
        403: {"description": "Estimate belongs to another client"},
        404: {"description": "Estimate not found"},
        409: {"description": "Estimate is not awaiting a decision"},
    },
)
async def decline_estimate(
    estimate_id: UUID,
    portal_session: PortalSessionDep,
    service: EstimateServiceDep,
    data: DeclineRequest | None = None,
) -> SuccessResponse:
    reason = data.reason if data else None
    await service.decline(estimate_id, portal_session, reason=reason)
    return SuccessResponse()


@router.get(
    "/{estimate_id}/questions",
    response_model=QuestionsResponse,
    summary="List estimate questions",
    description="Questions attached to the estimate's line items and the client's answers.",
    responses={
        403: {"description": "Estimate belongs to another client"},
        404: {"description": "Estimate not found"},
    },
)
async def list_estimate_questions(
    estimate_id: UUID,
    portal_session: PortalSessionDep,
    service: QuestionServiceDep,
) -> QuestionsResponse:
    questions, answers = await service.get_questions(estimate_id, portal_session)
    return QuestionsResponse(
        questions=[QuestionRead.model_validate(q) for q in questions],
        answers=[AnswerRead.model_validate(a) for a in answers],
    )


@router.post(
    "/{estimate_id}/questions",
    response_model=SubmitAnswersResponse,
    summary="Answer estimate questions",
    description="Submit answers; an answer replaces the client's earlier answer to that question.",
    responses={
        400: {"description": "No answers, or a question that is not on this estimate"},
        403: {"description": "Estimate belongs to another client"},
        404: {"description": "Estimate not found"},
    },
)
async def answer_estimate_questions(
    estimate_id: UUID,
    data: SubmitAnswersRequest,
    portal_session: PortalSessionDep,
    service: QuestionServiceDep,
) -> SubmitAnswersResponse:
    answers = await service.submit_answers(
        estimate_id,
        [(a.question_id, a.answer_value) for a in data.answers],
        portal_session,
    )
    return SubmitAnswersResponse(answers=[AnswerRead.model_validate(a) for a in answers])
