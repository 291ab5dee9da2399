"""Read access to a client's portal records."""

from collections import Counter
from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.portal.core.logging import get_logger
from src.portal.models import Estimate, Invoice, LineItem, Payment, PortalBranding, Project
from src.portal.repositories import (
    EstimateRepository,
    InvoiceRepository,
    LineItemQuestionRepository,
    LineItemRepository,
    PaymentRepository,
    PortalBrandingRepository,
    PortalMessageRepository,
    ProjectRepository,
)
from src.portal.schemas.session import PortalSession
from src.portal.services.activity_service import ActivityService
from src.portal.services.ownership import fetch_for_session

logger = get_logger(__name__)


@dataclass
class EstimateDetail:
    estimate: Estimate
    line_items: list[LineItem]


@dataclass
class InvoiceDetail:
    invoice: Invoice
    line_items: list[LineItem]
    payments: list[Payment]


@dataclass
class PortalOverview:
    branding: PortalBranding
    projects: list[Project]
    estimates: list[Estimate]
    invoices: list[Invoice]
    unread_messages: int = 0
    estimate_counts: Counter[UUID] = field(default_factory=Counter)
    invoice_counts: Counter[UUID] = field(default_factory=Counter)
    unanswered_estimate_ids: set[UUID] = field(default_factory=set)


class PortalService:
    """Ownership-scoped accessors for estimates, invoices and projects.

    Child rows (line items, payments) are only read after the parent
    document has passed the ownership check.
    """

    def __init__(
        self,
        estimate_repo: EstimateRepository,
        invoice_repo: InvoiceRepository,
        project_repo: ProjectRepository,
        branding_repo: PortalBrandingRepository,
        line_item_repo: LineItemRepository,
        payment_repo: PaymentRepository,
        message_repo: PortalMessageRepository,
        question_repo: LineItemQuestionRepository,
        session: AsyncSession,
        activity: ActivityService | None = None,
    ):
        self.estimate_repo = estimate_repo
        self.invoice_repo = invoice_repo
        self.project_repo = project_repo
        self.branding_repo = branding_repo
        self.line_item_repo = line_item_repo
        self.payment_repo = payment_repo
        self.message_repo = message_repo
        self.question_repo = question_repo
        self.session = session
        self.activity = activity

    async def get_estimate(self, estimate_id: UUID, portal_session: PortalSession) -> Estimate:
        """Get an owned estimate, stamping viewed_at the first time it is opened.

        The first view is also written to the activity timeline. Failing to
        record the view does not fail the read.
        """
        estimate = await fetch_for_session(self.estimate_repo, estimate_id, portal_session)
        if estimate.viewed_at is not None:
            return estimate

        first_view = False
        try:
            if await self.estimate_repo.mark_viewed(estimate.id):
                await self.session.commit()
                await self.session.refresh(estimate)
                first_view = True
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.warning(
                "Failed to record estimate view",
                estimate_id=str(estimate_id),
                error=str(e),
            )
            estimate = await fetch_for_session(self.estimate_repo, estimate_id, portal_session)

        if first_view and self.activity is not None:
            await self.activity.estimate_viewed(portal_session, estimate)
        return estimate

    async def get_estimate_detail(
        self, estimate_id: UUID, portal_session: PortalSession
    ) -> EstimateDetail:
        estimate = await self.get_estimate(estimate_id, portal_session)
        line_items = await self.line_item_repo.list_for_estimate(
            portal_session.company_id, estimate.id
        )
        return EstimateDetail(estimate=estimate, line_items=line_items)

    async def get_invoice(self, invoice_id: UUID, portal_session: PortalSession) -> Invoice:
        return await fetch_for_session(self.invoice_repo, invoice_id, portal_session)

    async def get_invoice_detail(
        self, invoice_id: UUID, portal_session: PortalSession
    ) -> InvoiceDetail:
        """Get an owned invoice with its line items and non-voided payments."""
        invoice = await self.get_invoice(invoice_id, portal_session)
        company_id = portal_session.company_id
        line_items = await self.line_item_repo.list_for_invoice(company_id, invoice.id)
        payments = await self.payment_repo.list_for_invoice(company_id, invoice.id)
        return InvoiceDetail(invoice=invoice, line_items=line_items, payments=payments)

    async def get_project(self, project_id: UUID, portal_session: PortalSession) -> Project:
        return await fetch_for_session(self.project_repo, project_id, portal_session)

    async def get_overview(self, portal_session: PortalSession) -> PortalOverview:
        """Collect branding, sent estimates, issued invoices and their projects.

        Project counts only cover the estimates and invoices listed here.
        """
        company_id = portal_session.company_id
        client_id = portal_session.client_id

        estimates = await self.estimate_repo.list_for_client(company_id, client_id)
        invoices = await self.invoice_repo.list_for_client(company_id, client_id)
        estimate_counts = Counter(e.project_id for e in estimates if e.project_id is not None)
        invoice_counts = Counter(i.project_id for i in invoices if i.project_id is not None)

        projects = await self.project_repo.list_by_ids(
            company_id, set(estimate_counts) | set(invoice_counts)
        )
        branding = await self.branding_repo.get_for_company(company_id)
        unread_messages = await self.message_repo.count_unread(company_id, client_id)
        unanswered = await self.question_repo.estimates_with_unanswered(
            (e.id for e in estimates), client_id
        )

        return PortalOverview(
            branding=branding,
            projects=projects,
            estimates=estimates,
            invoices=invoices,
            unread_messages=unread_messages,
            estimate_counts=estimate_counts,
            invoice_counts=invoice_counts,
            unanswered_estimate_ids=unanswered,
        )
