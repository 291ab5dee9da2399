"""Client-owned business documents - estimates and invoices."""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

from src.portal.models.base import utc_now
from src.portal.models.enums import EstimateStatus, InvoiceStatus


class Estimate(SQLModel, table=True):
    """Estimate sent to a client for approval."""

    __tablename__ = "estimates"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    company_id: str = Field(max_length=64, index=True)
    client_id: str = Field(max_length=64, index=True)
    project_id: UUID | None = Field(default=None, foreign_key="projects.id", index=True)
    estimate_number: str = Field(max_length=50)
    title: str | None = Field(default=None, max_length=200)
    total: Decimal = Field(default=Decimal("0.00"), max_digits=12, decimal_places=2)
    status: str = Field(default=EstimateStatus.DRAFT.value, max_length=20)
    issue_date: date | None = Field(default=None)
    expiration_date: date | None = Field(default=None)
    viewed_at: datetime | None = Field(default=None)
    approved_at: datetime | None = Field(default=None)
    approved_by: str | None = Field(default=None, max_length=64)
    declined_at: datetime | None = Field(default=None)
    decline_reason: str | None = Field(default=None, max_length=2000)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    deleted_at: datetime | None = Field(default=None)


class Invoice(SQLModel, table=True):
    """Invoice with an outstanding balance payable through the portal.

    balance_due is maintained downstream when gateway settlements are
    recorded; the portal only reads it.
    """

    __tablename__ = "invoices"
    __table_args__ = (
        CheckConstraint("balance_due >= 0", name="ck_invoices_balance_due_non_negative"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    company_id: str = Field(max_length=64, index=True)
    client_id: str = Field(max_length=64, index=True)
    project_id: UUID | None = Field(default=None, foreign_key="projects.id", index=True)
    invoice_number: str = Field(max_length=50)
    subject: str | None = Field(default=None, max_length=200)
    total: Decimal = Field(default=Decimal("0.00"), max_digits=12, decimal_places=2)
    amount_paid: Decimal = Field(default=Decimal("0.00"), max_digits=12, decimal_places=2)
    balance_due: Decimal = Field(default=Decimal("0.00"), max_digits=12, decimal_places=2)
    status: str = Field(default=InvoiceStatus.DRAFT.value, max_length=20)
    issue_date: date | None = Field(default=None)
    due_date: date | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    deleted_at: datetime | None = Field(default=None)


class LineItem(SQLModel, table=True):
    """A priced line on an estimate or an invoice (exactly one of the two)."""

    __tablename__ = "line_items"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    company_id: str = Field(max_length=64, index=True)
    estimate_id: UUID | None = Field(default=None, foreign_key="estimates.id", index=True)
    invoice_id: UUID | None = Field(default=None, foreign_key="invoices.id", index=True)
    name: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    quantity: Decimal = Field(default=Decimal("1.00"), max_digits=12, decimal_places=2)
    unit: str = Field(default="each", max_length=20)
    unit_price: Decimal = Field(default=Decimal("0.00"), max_digits=12, decimal_places=2)
    line_total: Decimal = Field(default=Decimal("0.00"), max_digits=12, decimal_places=2)
    is_optional: bool = Field(default=False)
    is_selected: bool = Field(default=True)
    category: str | None = Field(default=None, max_length=100)
    sort_order: int = Field(default=0)
    created_at: datetime = Field(default_factory=utc_now)


class Payment(SQLModel, table=True):
    """A payment recorded against an invoice.

    Rows are written by staff tools and the settlement webhook; the portal
    only lists the ones that have not been voided.
    """

    __tablename__ = "payments"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    company_id: str = Field(max_length=64, index=True)
    client_id: str = Field(max_length=64, index=True)
    invoice_id: UUID = Field(foreign_key="invoices.id", index=True)
    amount: Decimal = Field(max_digits=12, decimal_places=2)
    payment_method: str | None = Field(default=None, max_length=30)
    reference_number: str | None = Field(default=None, max_length=100)
    payment_date: datetime = Field(default_factory=utc_now)
    stripe_payment_intent: str | None = Field(default=None, max_length=255)
    created_at: datetime = Field(default_factory=utc_now)
    voided_at: datetime | None = Field(default=None)
