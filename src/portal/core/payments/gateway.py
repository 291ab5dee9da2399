"""Payment gateway client using the Stripe API."""

import asyncio
from dataclasses import dataclass
from typing import Any, Protocol

import stripe

from src.portal.core.logging import get_logger

logger = get_logger(__name__)


class PaymentGatewayError(Exception):
    """The gateway rejected the request or could not be reached."""


@dataclass(frozen=True)
class PaymentIntentResult:
    id: str
    client_secret: str


class PaymentGateway(Protocol):
    async def create_payment_intent(
        self,
        *,
        amount_minor: int,
        metadata: dict[str, str],
        idempotency_key: str | None = None,
    ) -> PaymentIntentResult: ...


class StripePaymentGateway:
    """Creates Stripe PaymentIntents off the event loop.

    The SDK is injectable so tests can pass a stand-in module; settlement
    webhooks are handled elsewhere.
    """

    def __init__(
        self,
        *,
        secret_key: str | None,
        currency: str = "usd",
        timeout_seconds: float = 10.0,
        stripe_sdk: Any | None = None,
    ) -> None:
        self.stripe = stripe_sdk if stripe_sdk is not None else stripe
        self.secret_key = secret_key
        self.currency = currency
        self.timeout_seconds = timeout_seconds

    async def create_payment_intent(
        self,
        *,
        amount_minor: int,
        metadata: dict[str, str],
        idempotency_key: str | None = None,
    ) -> PaymentIntentResult:
        if not self.secret_key:
            raise PaymentGatewayError("Stripe secret key not configured")

        params: dict[str, Any] = {
            "amount": amount_minor,
            "currency": self.currency,
            "metadata": metadata,
            "api_key": self.secret_key,
        }
        if idempotency_key:
            params["idempotency_key"] = idempotency_key

        try:
            intent = await asyncio.wait_for(
                asyncio.to_thread(self.stripe.PaymentIntent.create, **params),
                timeout=self.timeout_seconds,
            )
        except TimeoutError as e:
            raise PaymentGatewayError(
                f"Stripe request timed out after {self.timeout_seconds}s"
            ) from e
        except stripe.StripeError as e:
            raise PaymentGatewayError(str(e)) from e

        client_secret = intent["client_secret"]
        if not client_secret:
            raise PaymentGatewayError("Stripe returned a payment intent without a client secret")
        return PaymentIntentResult(id=intent["id"], client_secret=client_secret)
