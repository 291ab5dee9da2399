"""Message and line-item question schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from src.portal.schemas.base import CamelModel


class MessageRead(CamelModel):
    id: UUID
    project_id: UUID | None
    estimate_id: UUID | None
    invoice_id: UUID | None
    sender_type: str
    sender_name: str
    content: str
    read_at: datetime | None
    created_at: datetime


class SendMessageRequest(CamelModel):
    """New client message. Blank content is rejected by the message service."""

    content: str = Field(max_length=5000)
    project_id: UUID | None = None
    estimate_id: UUID | None = None
    invoice_id: UUID | None = None


class MessageListResponse(CamelModel):
    messages: list[MessageRead]
    limit: int
    offset: int


class MarkReadResponse(CamelModel):
    success: bool = True
    updated: int


class QuestionRead(CamelModel):
    id: UUID
    estimate_id: UUID
    line_item_id: UUID
    question_text: str
    answer_type: str
    options: list[str]
    is_required: bool
    sort_order: int


class AnswerRead(CamelModel):
    id: UUID
    question_id: UUID
    answer_value: str
    answered_at: datetime


class QuestionsResponse(CamelModel):
    questions: list[QuestionRead]
    answers: list[AnswerRead]


class AnswerInput(CamelModel):
    question_id: UUID
    answer_value: str = Field(max_length=2000)


class SubmitAnswersRequest(CamelModel):
    answers: list[AnswerInput]


class SubmitAnswersResponse(CamelModel):
    success: bool = True
    answers: list[AnswerRead]
