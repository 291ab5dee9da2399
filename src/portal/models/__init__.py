"""Model exports.

Import from here: `from src.portal.models import PortalToken, Estimate`
"""

# Enums
from src.portal.models.enums import (
    ActivityType,
    EstimateStatus,
    InvoiceStatus,
    MessageSender,
    ProjectStatus,
    QuestionAnswerType,
    TokenSource,
)

# Portal access
from src.portal.models.token import DEFAULT_ACCENT_COLOR, PortalBranding, PortalToken

# Business records
from src.portal.models.project import Project  # isort: skip
from src.portal.models.documents import Estimate, Invoice, LineItem, Payment

# Engagement
from src.portal.models.engagement import (
    LineItemAnswer,
    LineItemQuestion,
    PortalActivity,
    PortalMessage,
)

__all__ = [
    # Enums
    "ActivityType",
    "EstimateStatus",
    "InvoiceStatus",
    "MessageSender",
    "ProjectStatus",
    "QuestionAnswerType",
    "TokenSource",
    # Portal access
    "DEFAULT_ACCENT_COLOR",
    "PortalBranding",
    "PortalToken",
    # Business records
    "Estimate",
    "Invoice",
    "LineItem",
    "Payment",
    "Project",
    # Engagement
    "LineItemAnswer",
    "LineItemQuestion",
    "PortalActivity",
    "PortalMessage",
]
