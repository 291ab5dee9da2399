"""Repository dependencies."""

from typing import Annotated

from fastapi import Depends

from src.portal.api.dependencies.db import DBSession
from src.portal.repositories import (
    EstimateRepository,
    InvoiceRepository,
    LineItemAnswerRepository,
    LineItemQuestionRepository,
    LineItemRepository,
    PaymentRepository,
    PortalBrandingRepository,
    PortalMessageRepository,
    PortalTokenRepository,
    ProjectRepository,
)


def get_token_repository(session: DBSession) -> PortalTokenRepository:
    return PortalTokenRepository(session)


def get_branding_repository(session: DBSession) -> PortalBrandingRepository:
    return PortalBrandingRepository(session)


def get_estimate_repository(session: DBSession) -> EstimateRepository:
    return EstimateRepository(session)


def get_invoice_repository(session: DBSession) -> InvoiceRepository:
    return InvoiceRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_line_item_repository(session: DBSession) -> LineItemRepository:
    return LineItemRepository(session)


def get_payment_repository(session: DBSession) -> PaymentRepository:
    return PaymentRepository(session)


def get_message_repository(session: DBSession) -> PortalMessageRepository:
    return PortalMessageRepository(session)


def get_question_repository(session: DBSession) -> LineItemQuestionRepository:
    return LineItemQuestionRepository(session)


def get_answer_repository(session: DBSession) -> LineItemAnswerRepository:
    return LineItemAnswerRepository(session)


TokenRepo = Annotated[PortalTokenRepository, Depends(get_token_repository)]
BrandingRepo = Annotated[PortalBrandingRepository, Depends(get_branding_repository)]
EstimateRepo = Annotated[EstimateRepository, Depends(get_estimate_repository)]
InvoiceRepo = Annotated[InvoiceRepository, Depends(get_invoice_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
LineItemRepo = Annotated[LineItemRepository, Depends(get_line_item_repository)]
PaymentRepo = Annotated[PaymentRepository, Depends(get_payment_repository)]
MessageRepo = Annotated[PortalMessageRepository, Depends(get_message_repository)]
QuestionRepo = Annotated[LineItemQuestionRepository, Depends(get_question_repository)]
AnswerRepo = Annotated[LineItemAnswerRepository, Depends(get_answer_repository)]
