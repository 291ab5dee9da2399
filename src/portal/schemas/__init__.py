from src.portal.schemas.auth import (
    SendLinkRequest,
    SendLinkResponse,
    ShareRequest,
    ValidateTokenResponse,
    VerifyRequest,
    VerifyResponse,
)
from src.portal.schemas.base import CamelModel, Money, SuccessResponse
from src.portal.schemas.engagement import (
    AnswerInput,
    AnswerRead,
    MarkReadResponse,
    MessageListResponse,
    MessageRead,
    QuestionRead,
    QuestionsResponse,
    SendMessageRequest,
    SubmitAnswersRequest,
    SubmitAnswersResponse,
)
from src.portal.schemas.portal import (
    BrandingRead,
    DeclineRequest,
    EstimateDetailRead,
    EstimateRead,
    EstimateSummary,
    InvoiceDetailRead,
    InvoiceRead,
    LineItemRead,
    PaymentRead,
    PaymentRequest,
    PaymentResponse,
    PortalDataResponse,
    ProjectRead,
    ProjectSummary,
)
from src.portal.schemas.session import PortalSession

__all__ = [
    # Base
    "CamelModel",
    "Money",
    "SuccessResponse",
    # Auth
    "SendLinkRequest",
    "SendLinkResponse",
    "ShareRequest",
    "ValidateTokenResponse",
    "VerifyRequest",
    "VerifyResponse",
    # Session
    "PortalSession",
    # Portal resources
    "BrandingRead",
    "DeclineRequest",
    "EstimateDetailRead",
    "EstimateRead",
    "EstimateSummary",
    "InvoiceDetailRead",
    "InvoiceRead",
    "LineItemRead",
    "PaymentRead",
    "PaymentRequest",
    "PaymentResponse",
    "PortalDataResponse",
    "ProjectRead",
    "ProjectSummary",
    # Engagement
    "AnswerInput",
    "AnswerRead",
    "MarkReadResponse",
    "MessageListResponse",
    "MessageRead",
    "QuestionRead",
    "QuestionsResponse",
    "SendMessageRequest",
    "SubmitAnswersRequest",
    "SubmitAnswersResponse",
]
