"""Portal factories for test data generation."""

import secrets
from datetime import timedelta
from decimal import Decimal
from hashlib import sha256
from uuid import uuid4

from polyfactory import Use

from src.portal.models import (
    DEFAULT_ACCENT_COLOR,
    Estimate,
    EstimateStatus,
    Invoice,
    InvoiceStatus,
    LineItem,
    LineItemAnswer,
    LineItemQuestion,
    MessageSender,
    Payment,
    PortalBranding,
    PortalMessage,
    PortalToken,
    Project,
    ProjectStatus,
    QuestionAnswerType,
    TokenSource,
)
from tests.factories.base import BaseFactory, utc_now

DEFAULT_COMPANY_ID = "company-a"
DEFAULT_CLIENT_ID = "client-a"


def generate_token_hash() -> str:
    """Generate a random token hash."""
    return sha256(secrets.token_hex(32).encode()).hexdigest()


class PortalTokenFactory(BaseFactory):
    """Factory for generating PortalToken test data."""

    __model__ = PortalToken

    id = Use(uuid4)
    company_id = DEFAULT_COMPANY_ID
    client_id = DEFAULT_CLIENT_ID
    email = Use(lambda: f"client_{uuid4().hex[-8:]}@example.com")
    token_hash = Use(generate_token_hash)
    source = TokenSource.SELF_SERVICE.value
    created_at = Use(utc_now)
    expires_at = Use(lambda: utc_now() + timedelta(days=7))
    revoked_at = None

    @classmethod
    def with_secret(cls, **kwargs) -> tuple[PortalToken, str]:
        """Build a token together with the plaintext secret that resolves to it."""
        secret = secrets.token_hex(32)
        token = cls.build(token_hash=sha256(secret.encode()).hexdigest(), **kwargs)
        return token, secret

    @classmethod
    def expired(cls, **kwargs) -> tuple[PortalToken, str]:
        """Create an expired token."""
        return cls.with_secret(expires_at=utc_now() - timedelta(seconds=1), **kwargs)

    @classmethod
    def revoked_token(cls, **kwargs) -> tuple[PortalToken, str]:
        """Create a revoked token."""
        return cls.with_secret(revoked_at=utc_now(), **kwargs)


class PortalBrandingFactory(BaseFactory):
    __model__ = PortalBranding

    id = Use(uuid4)
    company_id = DEFAULT_COMPANY_ID
    logo_url = "https://cdn.example.com/logo.png"
    accent_color = DEFAULT_ACCENT_COLOR
    welcome_message = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)


class ProjectFactory(BaseFactory):
    """Factory for generating Project test data."""

    __model__ = Project

    id = Use(uuid4)
    company_id = DEFAULT_COMPANY_ID
    title = Use(lambda: f"Project {uuid4().hex[-6:]}")
    address = "12 Harbour Road"
    description = None
    status = ProjectStatus.ACTIVE.value
    start_date = None
    end_date = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)
    deleted_at = None


class EstimateFactory(BaseFactory):
    """Factory for generating Estimate test data. Defaults to a pending estimate."""

    __model__ = Estimate

    id = Use(uuid4)
    company_id = DEFAULT_COMPANY_ID
    client_id = DEFAULT_CLIENT_ID
    project_id = None
    estimate_number = Use(lambda: f"EST-{secrets.randbelow(100000):05d}")
    title = "Kitchen remodel"
    total = Decimal("1250.00")
    status = EstimateStatus.PENDING.value
    issue_date = None
    expiration_date = None
    viewed_at = None
    approved_at = None
    approved_by = None
    declined_at = None
    decline_reason = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)
    deleted_at = None

    @classmethod
    def draft(cls, **kwargs) -> Estimate:
        return cls.build(status=EstimateStatus.DRAFT.value, **kwargs)

    @classmethod
    def deleted(cls, **kwargs) -> Estimate:
        """Create a soft-deleted estimate."""
        return cls.build(deleted_at=utc_now(), **kwargs)


class InvoiceFactory(BaseFactory):
    """Factory for generating Invoice test data. Defaults to $500.00 outstanding."""

    __model__ = Invoice

    id = Use(uuid4)
    company_id = DEFAULT_COMPANY_ID
    client_id = DEFAULT_CLIENT_ID
    project_id = None
    invoice_number = Use(lambda: f"INV-{secrets.randbelow(100000):05d}")
    subject = "Progress payment"
    total = Decimal("500.00")
    amount_paid = Decimal("0.00")
    balance_due = Decimal("500.00")
    status = InvoiceStatus.SENT.value
    issue_date = None
    due_date = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)
    deleted_at = None

    @classmethod
    def draft(cls, **kwargs) -> Invoice:
        return cls.build(status=InvoiceStatus.DRAFT.value, **kwargs)

    @classmethod
    def deleted(cls, **kwargs) -> Invoice:
        """Create a soft-deleted invoice."""
        return cls.build(deleted_at=utc_now(), **kwargs)


class LineItemFactory(BaseFactory):
    """Factory for line items. Pass estimate_id or invoice_id."""

    __model__ = LineItem

    id = Use(uuid4)
    company_id = DEFAULT_COMPANY_ID
    estimate_id = None
    invoice_id = None
    name = "Cabinet install"
    description = None
    quantity = Decimal("2.00")
    unit = "each"
    unit_price = Decimal("150.00")
    line_total = Decimal("300.00")
    is_optional = False
    is_selected = True
    category = None
    sort_order = 0
    created_at = Use(utc_now)


class PaymentFactory(BaseFactory):
    """Factory for recorded payments. Pass invoice_id."""

    __model__ = Payment

    id = Use(uuid4)
    company_id = DEFAULT_COMPANY_ID
    client_id = DEFAULT_CLIENT_ID
    amount = Decimal("100.00")
    payment_method = "card"
    reference_number = None
    payment_date = Use(utc_now)
    stripe_payment_intent = None
    created_at = Use(utc_now)
    voided_at = None


class LineItemQuestionFactory(BaseFactory):
    """Factory for line-item questions. Pass estimate_id and line_item_id."""

    __model__ = LineItemQuestion

    id = Use(uuid4)
    company_id = DEFAULT_COMPANY_ID
    question_text = "Which finish would you like?"
    answer_type = QuestionAnswerType.SELECT.value
    options = Use(lambda: ["Oak", "Walnut"])
    is_required = True
    sort_order = 0
    created_at = Use(utc_now)


class LineItemAnswerFactory(BaseFactory):
    __model__ = LineItemAnswer

    id = Use(uuid4)
    client_id = DEFAULT_CLIENT_ID
    answer_value = "Oak"
    answered_at = Use(utc_now)


class PortalMessageFactory(BaseFactory):
    """Factory for messages. Defaults to an unread message from the company."""

    __model__ = PortalMessage

    id = Use(uuid4)
    company_id = DEFAULT_COMPANY_ID
    client_id = DEFAULT_CLIENT_ID
    project_id = None
    estimate_id = None
    invoice_id = None
    sender_type = MessageSender.COMPANY.value
    sender_name = "Acme Builders"
    content = "Your estimate is ready."
    read_at = None
    created_at = Use(utc_now)
