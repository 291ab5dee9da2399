"""Payment gateway integration."""

from src.portal.core.payments.gateway import (
    PaymentGateway,
    PaymentGatewayError,
    PaymentIntentResult,
    StripePaymentGateway,
)

__all__ = [
    "PaymentGateway",
    "PaymentGatewayError",
    "PaymentIntentResult",
    "StripePaymentGateway",
]
