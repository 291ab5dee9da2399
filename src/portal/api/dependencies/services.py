"""Service dependencies and external collaborators.

Collaborators (payment gateway, email sender) are resolved through
their own dependencies so tests can swap them with dependency_overrides.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.portal.api.dependencies.db import DBSession
from src.portal.api.dependencies.repositories import (
    AnswerRepo,
    BrandingRepo,
    EstimateRepo,
    InvoiceRepo,
    LineItemRepo,
    MessageRepo,
    PaymentRepo,
    ProjectRepo,
    QuestionRepo,
    TokenRepo,
)
from src.portal.core.config import get_settings
from src.portal.core.db import get_engine
from src.portal.core.notifications import send_portal_link_email
from src.portal.core.payments import PaymentGateway, StripePaymentGateway
from src.portal.repositories import PortalActivityRepository
from src.portal.services import (
    ActivityService,
    EstimateService,
    MessageService,
    PaymentService,
    PortalLinkService,
    PortalService,
    PortalTokenService,
    QuestionService,
)
from src.portal.services.link_service import EmailSender


def get_payment_gateway() -> PaymentGateway:
    settings = get_settings()
    return StripePaymentGateway(
        secret_key=settings.stripe_secret_key,
        currency=settings.stripe_currency,
        timeout_seconds=settings.stripe_timeout_seconds,
    )


def get_email_sender() -> EmailSender:
    return send_portal_link_email


PaymentGatewayDep = Annotated[PaymentGateway, Depends(get_payment_gateway)]
EmailSenderDep = Annotated[EmailSender, Depends(get_email_sender)]


async def get_activity_service() -> AsyncGenerator[ActivityService]:
    """Get activity service with its own isolated session.

    Timeline writes commit independently of the request's transaction,
    so a failed write cannot undo the action it describes.
    """
    engine = get_engine()
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield ActivityService(PortalActivityRepository(session), session)


ActivityServiceDep = Annotated[ActivityService, Depends(get_activity_service)]


def get_token_service(token_repo: TokenRepo, session: DBSession) -> PortalTokenService:
    return PortalTokenService(token_repo, session)


TokenServiceDep = Annotated[PortalTokenService, Depends(get_token_service)]


def get_link_service(
    token_service: TokenServiceDep,
    branding_repo: BrandingRepo,
    email_sender: EmailSenderDep,
) -> PortalLinkService:
    return PortalLinkService(token_service, branding_repo, email_sender)


def get_portal_service(
    estimate_repo: EstimateRepo,
    invoice_repo: InvoiceRepo,
    project_repo: ProjectRepo,
    branding_repo: BrandingRepo,
    line_item_repo: LineItemRepo,
    payment_repo: PaymentRepo,
    message_repo: MessageRepo,
    question_repo: QuestionRepo,
    session: DBSession,
    activity: ActivityServiceDep,
) -> PortalService:
    return PortalService(
        estimate_repo,
        invoice_repo,
        project_repo,
        branding_repo,
        line_item_repo,
        payment_repo,
        message_repo,
        question_repo,
        session,
        activity,
    )


def get_estimate_service(
    estimate_repo: EstimateRepo,
    session: DBSession,
    activity: ActivityServiceDep,
) -> EstimateService:
    return EstimateService(estimate_repo, session, activity)


def get_payment_service(
    invoice_repo: InvoiceRepo,
    gateway: PaymentGatewayDep,
    activity: ActivityServiceDep,
) -> PaymentService:
    return PaymentService(invoice_repo, gateway, activity)


def get_message_service(
    message_repo: MessageRepo,
    estimate_repo: EstimateRepo,
    invoice_repo: InvoiceRepo,
    project_repo: ProjectRepo,
    session: DBSession,
    activity: ActivityServiceDep,
) -> MessageService:
    return MessageService(message_repo, estimate_repo, invoice_repo, project_repo, session, activity)


def get_question_service(
    question_repo: QuestionRepo,
    answer_repo: AnswerRepo,
    estimate_repo: EstimateRepo,
    session: DBSession,
    activity: ActivityServiceDep,
) -> QuestionService:
    return QuestionService(question_repo, answer_repo, estimate_repo, session, activity)


LinkServiceDep = Annotated[PortalLinkService, Depends(get_link_service)]
PortalServiceDep = Annotated[PortalService, Depends(get_portal_service)]
EstimateServiceDep = Annotated[EstimateService, Depends(get_estimate_service)]
PaymentServiceDep = Annotated[PaymentService, Depends(get_payment_service)]
MessageServiceDep = Annotated[MessageService, Depends(get_message_service)]
QuestionServiceDep = Annotated[QuestionService, Depends(get_question_service)]
