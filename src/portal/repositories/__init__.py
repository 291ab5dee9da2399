"""Repository layer - data access abstraction."""

from src.portal.repositories.base import BaseRepository, OwnedRepository
from src.portal.repositories.documents import (
    EstimateRepository,
    InvoiceRepository,
    LineItemRepository,
    PaymentRepository,
)
from src.portal.repositories.engagement import (
    LineItemAnswerRepository,
    LineItemQuestionRepository,
    PortalActivityRepository,
    PortalMessageRepository,
)
from src.portal.repositories.project import ProjectRepository
from src.portal.repositories.token import PortalBrandingRepository, PortalTokenRepository

__all__ = [
    # Base
    "BaseRepository",
    "OwnedRepository",
    # Portal access
    "PortalBrandingRepository",
    "PortalTokenRepository",
    # Business records
    "EstimateRepository",
    "InvoiceRepository",
    "LineItemRepository",
    "PaymentRepository",
    "ProjectRepository",
    # Engagement
    "LineItemAnswerRepository",
    "LineItemQuestionRepository",
    "PortalActivityRepository",
    "PortalMessageRepository",
]
