"""Shared enums for models."""

from enum import Enum


class TokenSource(str, Enum):
    """How a portal token was issued."""

    SELF_SERVICE = "self_service"
    SHARE = "share"


class EstimateStatus(str, Enum):
    """Estimate lifecycle status. Only PENDING is actionable by the client."""

    DRAFT = "draft"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    EXPIRED = "expired"


class InvoiceStatus(str, Enum):
    """Invoice lifecycle status."""

    DRAFT = "draft"
    SENT = "sent"
    PARTIALLY_PAID = "partially_paid"
    PAID = "paid"
    OVERDUE = "overdue"
    VOID = "void"


class ProjectStatus(str, Enum):
    """Project lifecycle status."""

    PLANNING = "planning"
    ACTIVE = "active"
    ON_HOLD = "on_hold"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class QuestionAnswerType(str, Enum):
    """Kind of input a line-item question expects."""

    TEXT = "text"
    SELECT = "select"
    MULTISELECT = "multiselect"
    COLOR = "color"
    NUMBER = "number"


class MessageSender(str, Enum):
    CLIENT = "client"
    COMPANY = "company"


class ActivityType(str, Enum):
    """Client actions recorded on the company's activity timeline."""

    ESTIMATE_VIEWED = "estimate_viewed"
    ESTIMATE_APPROVED = "estimate_approved"
    ESTIMATE_DECLINED = "estimate_declined"
    QUESTIONS_ANSWERED = "questions_answered"
    PAYMENT_STARTED = "payment_started"
    CLIENT_MESSAGE = "client_message"
