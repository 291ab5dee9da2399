from src.portal.services.activity_service import ActivityService
from src.portal.services.estimate_service import EstimateService
from src.portal.services.link_service import PortalLinkService
from src.portal.services.message_service import MessageService
from src.portal.services.ownership import fetch_for_session, fetch_owned
from src.portal.services.payment_service import PaymentService, parse_amount, to_minor_units
from src.portal.services.portal_service import (
    EstimateDetail,
    InvoiceDetail,
    PortalOverview,
    PortalService,
)
from src.portal.services.question_service import QuestionService
from src.portal.services.token_service import PortalTokenService

__all__ = [
    "ActivityService",
    "EstimateDetail",
    "EstimateService",
    "InvoiceDetail",
    "MessageService",
    "PaymentService",
    "PortalLinkService",
    "PortalOverview",
    "PortalService",
    "PortalTokenService",
    "QuestionService",
    "fetch_for_session",
    "fetch_owned",
    "parse_amount",
    "to_minor_units",
]
