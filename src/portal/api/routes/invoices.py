"""Invoice endpoints - view and pay."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Header

from src.portal.api.dependencies import PaymentServiceDep, PortalServiceDep, PortalSessionDep
from src.portal.schemas import (
    InvoiceDetailRead,
    LineItemRead,
    PaymentRead,
    PaymentRequest,
    PaymentResponse,
)

router = APIRouter(prefix="/invoices", tags=["portal-invoices"])


@router.get(
    "/{invoice_id}",
    response_model=InvoiceDetailRead,
    summary="Get invoice",
    description="The invoice with its line items and the payments recorded against it.",
    responses={
        403: {"description": "Invoice belongs to another client"},
        404: {"description": "Invoice not found"},
    },
)
async def get_invoice(
    invoice_id: UUID,
    portal_session: PortalSessionDep,
    service: PortalServiceDep,
) -> InvoiceDetailRead:
    detail = await service.get_invoice_detail(invoice_id, portal_session)
    return InvoiceDetailRead.model_validate(detail.invoice).model_copy(
        update={
            "line_items": [LineItemRead.model_validate(i) for i in detail.line_items],
            "payments": [PaymentRead.model_validate(p) for p in detail.payments],
        }
    )


@router.post(
    "/{invoice_id}/pay",
    response_model=PaymentResponse,
    summary="Start a payment",
    description=(
        "Create a payment intent for part or all of the balance due. Send an "
        "Idempotency-Key header to make retries of the same attempt safe."
    ),
    responses={
        400: {"description": "Amount is not a positive number or exceeds the balance due"},
        403: {"description": "Invoice belongs to another client"},
        404: {"description": "Invoice not found"},
        500: {"description": "Payment gateway failure"},
    },
)
async def pay_invoice(
    invoice_id: UUID,
    data: PaymentRequest,
    portal_session: PortalSessionDep,
    service: PaymentServiceDep,
    idempotency_key: Annotated[str | None, Header(max_length=255)] = None,
) -> PaymentResponse:
    client_secret = await service.create_payment(
        invoice_id,
        data.amount,
        portal_session,
        idempotency_nonce=idempotency_key,
    )
    return PaymentResponse(client_secret=client_secret)
