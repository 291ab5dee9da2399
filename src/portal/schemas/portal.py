"""Portal resource schemas for API request/response."""

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import Field, field_validator

from src.portal.schemas.base import CamelModel, Money


class EstimateRead(CamelModel):
    id: UUID
    company_id: str
    client_id: str
    project_id: UUID | None
    estimate_number: str
    title: str | None
    total: Money
    status: str
    issue_date: date | None
    expiration_date: date | None
    viewed_at: datetime | None
    approved_at: datetime | None
    declined_at: datetime | None
    decline_reason: str | None
    created_at: datetime


class InvoiceRead(CamelModel):
    id: UUID
    company_id: str
    client_id: str
    project_id: UUID | None
    invoice_number: str
    subject: str | None
    total: Money
    amount_paid: Money
    balance_due: Money
    status: str
    issue_date: date | None
    due_date: date | None
    created_at: datetime


class LineItemRead(CamelModel):
    id: UUID
    name: str
    description: str | None
    quantity: Money
    unit: str
    unit_price: Money
    line_total: Money
    is_optional: bool
    is_selected: bool
    category: str | None
    sort_order: int


class PaymentRead(CamelModel):
    id: UUID
    amount: Money
    payment_method: str | None
    reference_number: str | None
    payment_date: datetime


class EstimateSummary(EstimateRead):
    has_unanswered_questions: bool = False


class EstimateDetailRead(EstimateRead):
    line_items: list[LineItemRead] = []


class InvoiceDetailRead(InvoiceRead):
    line_items: list[LineItemRead] = []
    payments: list[PaymentRead] = []


class ProjectRead(CamelModel):
    id: UUID
    company_id: str
    title: str
    address: str | None
    description: str | None
    status: str
    start_date: date | None
    end_date: date | None


class ProjectSummary(ProjectRead):
    """Project as listed on the overview, with the client's document counts."""

    estimate_count: int = 0
    invoice_count: int = 0


class BrandingRead(CamelModel):
    company_id: str
    logo_url: str | None
    accent_color: str
    welcome_message: str | None


class PortalDataResponse(CamelModel):
    """Everything the portal home page renders for a client."""

    client_id: str
    company_id: str
    branding: BrandingRead
    projects: list[ProjectSummary]
    estimates: list[EstimateSummary]
    invoices: list[InvoiceRead]
    unread_messages: int = 0


class DeclineRequest(CamelModel):
    reason: str | None = Field(default=None, max_length=2000)

    @field_validator("reason")
    @classmethod
    def validate_reason(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                return None
        return v


class PaymentRequest(CamelModel):
    """Payment amount in decimal currency units.

    Left untyped here; the payment service owns amount validation so that
    every malformed amount gets the same message.
    """

    amount: Any = None


class PaymentResponse(CamelModel):
    client_secret: str
