"""Client engagement - messages, line-item questions and the activity timeline."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import JSON, CheckConstraint, Column, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, SQLModel

from src.portal.models.base import utc_now
from src.portal.models.enums import MessageSender, QuestionAnswerType


class PortalMessage(SQLModel, table=True):
    """A message in the conversation between a client and a company.

    read_at is set when the recipient has seen it; the portal counts
    company messages with no read_at as unread.
    """

    __tablename__ = "portal_messages"
    __table_args__ = (
        CheckConstraint(
            "sender_type IN ('client', 'company')", name="ck_portal_messages_sender_type"
        ),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    company_id: str = Field(max_length=64, index=True)
    client_id: str = Field(max_length=64, index=True)
    project_id: UUID | None = Field(default=None, foreign_key="projects.id")
    estimate_id: UUID | None = Field(default=None, foreign_key="estimates.id")
    invoice_id: UUID | None = Field(default=None, foreign_key="invoices.id")
    sender_type: str = Field(default=MessageSender.CLIENT.value, max_length=10)
    sender_name: str = Field(max_length=255)
    content: str = Field(max_length=5000)
    read_at: datetime | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, index=True)


class LineItemQuestion(SQLModel, table=True):
    """A question the company attached to an estimate line item."""

    __tablename__ = "line_item_questions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    company_id: str = Field(max_length=64, index=True)
    estimate_id: UUID = Field(foreign_key="estimates.id", index=True)
    line_item_id: UUID = Field(foreign_key="line_items.id", index=True)
    question_text: str = Field(max_length=1000)
    answer_type: str = Field(default=QuestionAnswerType.TEXT.value, max_length=20)
    options: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False),
    )
    is_required: bool = Field(default=True)
    sort_order: int = Field(default=0)
    created_at: datetime = Field(default_factory=utc_now)


class LineItemAnswer(SQLModel, table=True):
    """A client's answer to a line-item question. One per client per question."""

    __tablename__ = "line_item_answers"
    __table_args__ = (
        UniqueConstraint("question_id", "client_id", name="uq_line_item_answers_question_client"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    question_id: UUID = Field(foreign_key="line_item_questions.id", index=True)
    client_id: str = Field(max_length=64)
    answer_value: str = Field(max_length=2000)
    answered_at: datetime = Field(default_factory=utc_now)


class PortalActivity(SQLModel, table=True):
    """Timeline entry for something a client did in the portal."""

    __tablename__ = "portal_activities"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    company_id: str = Field(max_length=64, index=True)
    client_id: str = Field(max_length=64, index=True)
    estimate_id: UUID | None = Field(default=None, index=True)
    invoice_id: UUID | None = Field(default=None, index=True)
    project_id: UUID | None = Field(default=None)
    type: str = Field(max_length=30)
    subject: str = Field(max_length=500)
    content: str | None = Field(default=None, max_length=5000)
    created_at: datetime = Field(default_factory=utc_now)
