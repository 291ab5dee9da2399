"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import EstimateFactory, PortalTokenFactory, ...
"""

from tests.factories.base import BaseFactory, utc_now
from tests.factories.portal import (
    EstimateFactory,
    InvoiceFactory,
    LineItemAnswerFactory,
    LineItemFactory,
    LineItemQuestionFactory,
    PaymentFactory,
    PortalBrandingFactory,
    PortalMessageFactory,
    PortalTokenFactory,
    ProjectFactory,
    generate_token_hash,
)

__all__ = [
    # Base
    "BaseFactory",
    "utc_now",
    # Portal access
    "PortalBrandingFactory",
    "PortalTokenFactory",
    "generate_token_hash",
    # Business records
    "EstimateFactory",
    "InvoiceFactory",
    "LineItemFactory",
    "PaymentFactory",
    "ProjectFactory",
    # Engagement
    "LineItemAnswerFactory",
    "LineItemQuestionFactory",
    "PortalMessageFactory",
]
