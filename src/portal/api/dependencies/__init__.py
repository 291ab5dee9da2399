"""FastAPI dependency injection definitions.

Re-exports all dependencies for convenience.
"""

# Auth
from src.portal.api.dependencies.auth import (
    AdminDep,
    PortalSessionDep,
    extract_portal_token,
    require_admin,
    require_portal_session,
)

# Database
from src.portal.api.dependencies.db import DBSession, get_db_session

# Repositories
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
    get_answer_repository,
    get_branding_repository,
    get_estimate_repository,
    get_invoice_repository,
    get_line_item_repository,
    get_message_repository,
    get_payment_repository,
    get_project_repository,
    get_question_repository,
    get_token_repository,
)

# Services
from src.portal.api.dependencies.services import (
    ActivityServiceDep,
    EmailSenderDep,
    EstimateServiceDep,
    LinkServiceDep,
    MessageServiceDep,
    PaymentGatewayDep,
    PaymentServiceDep,
    PortalServiceDep,
    QuestionServiceDep,
    TokenServiceDep,
    get_activity_service,
    get_email_sender,
    get_estimate_service,
    get_link_service,
    get_message_service,
    get_payment_gateway,
    get_payment_service,
    get_portal_service,
    get_question_service,
    get_token_service,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Auth
    "AdminDep",
    "PortalSessionDep",
    "extract_portal_token",
    "require_admin",
    "require_portal_session",
    # Repositories
    "AnswerRepo",
    "BrandingRepo",
    "EstimateRepo",
    "InvoiceRepo",
    "LineItemRepo",
    "MessageRepo",
    "PaymentRepo",
    "ProjectRepo",
    "QuestionRepo",
    "TokenRepo",
    "get_answer_repository",
    "get_branding_repository",
    "get_estimate_repository",
    "get_invoice_repository",
    "get_line_item_repository",
    "get_message_repository",
    "get_payment_repository",
    "get_project_repository",
    "get_question_repository",
    "get_token_repository",
    # Services
    "ActivityServiceDep",
    "EmailSenderDep",
    "EstimateServiceDep",
    "LinkServiceDep",
    "MessageServiceDep",
    "PaymentGatewayDep",
    "PaymentServiceDep",
    "PortalServiceDep",
    "QuestionServiceDep",
    "TokenServiceDep",
    "get_activity_service",
    "get_email_sender",
    "get_estimate_service",
    "get_link_service",
    "get_message_service",
    "get_payment_gateway",
    "get_payment_service",
    "get_portal_service",
    "get_question_service",
    "get_token_service",
]
