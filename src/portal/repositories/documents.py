"""Repositories for estimates and invoices."""

from typing import Any
from uuid import UUID

from sqlalchemy import update
from sqlmodel import col, select

from src.portal.models.base import utc_now
from src.portal.models.documents import Estimate, Invoice, LineItem, Payment
from src.portal.models.enums import EstimateStatus, InvoiceStatus
from src.portal.repositories.base import BaseRepository, OwnedRepository


class EstimateRepository(OwnedRepository[Estimate]):
    model = Estimate
    resource_name = "Estimate"

    async def list_for_client(self, company_id: str, client_id: str) -> list[Estimate]:
        """List the client's estimates that have been sent, newest first."""
        result = await self.session.execute(
            select(Estimate)
            .where(
                *self._scope(company_id, client_id),
                Estimate.status != EstimateStatus.DRAFT.value,
            )
            .order_by(col(Estimate.created_at).desc())
        )
        return list(result.scalars().all())

    async def transition_status(
        self,
        estimate_id: UUID,
        *,
        company_id: str,
        client_id: str,
        from_status: EstimateStatus,
        to_status: EstimateStatus,
        **values: Any,
    ) -> bool:
        """Compare-and-set the status of an owned estimate.

        The status check and the write are one UPDATE statement, so of two
        concurrent transitions from the same state only one matches a row.

        Returns True if this call performed the transition.
        """
        stmt = (
            update(Estimate)
            .where(
                Estimate.id == estimate_id,  # type: ignore[arg-type]
                *self._scope(company_id, client_id),
                Estimate.status == from_status.value,  # type: ignore[arg-type]
            )
            .values(status=to_status.value, updated_at=utc_now(), **values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return (result.rowcount or 0) == 1  # type: ignore[attr-defined]

    async def mark_viewed(self, estimate_id: UUID) -> bool:
        """Stamp viewed_at on the first view only."""
        stmt = (
            update(Estimate)
            .where(
                Estimate.id == estimate_id,  # type: ignore[arg-type]
                Estimate.viewed_at.is_(None),  # type: ignore[union-attr]
            )
            .values(viewed_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return (result.rowcount or 0) == 1  # type: ignore[attr-defined]


class InvoiceRepository(OwnedRepository[Invoice]):
    model = Invoice
    resource_name = "Invoice"

    async def list_for_client(self, company_id: str, client_id: str) -> list[Invoice]:
        """List the client's issued invoices, newest first."""
        result = await self.session.execute(
            select(Invoice)
            .where(
                *self._scope(company_id, client_id),
                Invoice.status != InvoiceStatus.DRAFT.value,
            )
            .order_by(col(Invoice.created_at).desc())
        )
        return list(result.scalars().all())


class LineItemRepository(BaseRepository[LineItem]):
    """Line items are read through their parent document, never on their own.

    Callers check ownership of the estimate or invoice first.
    """

    model = LineItem

    async def list_for_estimate(self, company_id: str, estimate_id: UUID) -> list[LineItem]:
        result = await self.session.execute(
            select(LineItem)
            .where(LineItem.company_id == company_id, LineItem.estimate_id == estimate_id)
            .order_by(col(LineItem.sort_order), col(LineItem.created_at))
        )
        return list(result.scalars().all())

    async def list_for_invoice(self, company_id: str, invoice_id: UUID) -> list[LineItem]:
        result = await self.session.execute(
            select(LineItem)
            .where(LineItem.company_id == company_id, LineItem.invoice_id == invoice_id)
            .order_by(col(LineItem.sort_order), col(LineItem.created_at))
        )
        return list(result.scalars().all())


class PaymentRepository(BaseRepository[Payment]):
    model = Payment

    async def list_for_invoice(self, company_id: str, invoice_id: UUID) -> list[Payment]:
        """List the invoice's payments that have not been voided, most recent first."""
        result = await self.session.execute(
            select(Payment)
            .where(
                Payment.company_id == company_id,
                Payment.invoice_id == invoice_id,
                col(Payment.voided_at).is_(None),
            )
            .order_by(col(Payment.payment_date).desc())
        )
        return list(result.scalars().all())
