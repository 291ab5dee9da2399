"""Payment intent orchestration for invoice payments."""

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any
from uuid import UUID

from src.portal.core.exceptions import InternalError, PortalValidationError
from src.portal.core.logging import get_logger
from src.portal.core.payments import PaymentGateway, PaymentGatewayError
from src.portal.core.security import derive_idempotency_key
from src.portal.repositories import InvoiceRepository
from src.portal.schemas.session import PortalSession
from src.portal.services.activity_service import ActivityService
from src.portal.services.ownership import fetch_for_session

logger = get_logger(__name__)

INVALID_AMOUNT_MESSAGE = "Amount must be a positive number"


def parse_amount(raw: Any) -> Decimal:
    """Parse a JSON payment amount into a positive Decimal.

    Only JSON numbers are accepted; booleans, strings, null and non-finite
    values are rejected.
    """
    if isinstance(raw, bool) or not isinstance(raw, int | float | Decimal):
        raise PortalValidationError(INVALID_AMOUNT_MESSAGE)
    if isinstance(raw, float) and not math.isfinite(raw):
        raise PortalValidationError(INVALID_AMOUNT_MESSAGE)

    try:
        value = Decimal(str(raw))
    except InvalidOperation as e:
        raise PortalValidationError(INVALID_AMOUNT_MESSAGE) from e

    if not value.is_finite() or value <= 0:
        raise PortalValidationError(INVALID_AMOUNT_MESSAGE)
    return value


def to_minor_units(amount: Decimal) -> int:
    """Convert currency units to cents, rounding half up (never truncating)."""
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class PaymentService:
    """Validates a payment against an invoice and opens a gateway payment intent.

    No payment row is written here; settlement is recorded from gateway
    webhooks. The attempt is noted on the activity timeline.
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        gateway: PaymentGateway,
        activity: ActivityService | None = None,
    ):
        self.invoice_repo = invoice_repo
        self.gateway = gateway
        self.activity = activity

    async def create_payment(
        self,
        invoice_id: UUID,
        amount: Any,
        portal_session: PortalSession,
        idempotency_nonce: str | None = None,
    ) -> str:
        """Create a payment intent and return its client secret verbatim."""
        value = parse_amount(amount)
        amount_minor = to_minor_units(value)
        if amount_minor < 1:
            raise PortalValidationError(INVALID_AMOUNT_MESSAGE)

        invoice = await fetch_for_session(self.invoice_repo, invoice_id, portal_session)

        balance = Decimal(invoice.balance_due)
        if value > balance:
            raise PortalValidationError(
                f"Payment amount (${value:.2f}) exceeds balance due (${balance:.2f})"
            )

        metadata = {
            "invoiceId": str(invoice.id),
            "invoiceNumber": invoice.invoice_number,
            "clientId": portal_session.client_id,
            "companyId": portal_session.company_id,
        }
        idempotency_key = None
        if idempotency_nonce:
            idempotency_key = derive_idempotency_key(
                str(invoice.id), portal_session.client_id, amount_minor, idempotency_nonce
            )

        try:
            intent = await self.gateway.create_payment_intent(
                amount_minor=amount_minor,
                metadata=metadata,
                idempotency_key=idempotency_key,
            )
        except PaymentGatewayError as e:
            logger.error(
                "Payment gateway failure",
                invoice_id=str(invoice.id),
                amount_minor=amount_minor,
                error=str(e),
            )
            raise InternalError("Failed to create payment") from e

        logger.info(
            "Payment intent created",
            invoice_id=str(invoice.id),
            amount_minor=amount_minor,
            payment_intent_id=intent.id,
        )
        if self.activity is not None:
            await self.activity.payment_started(portal_session, invoice, value)
        return intent.client_secret
