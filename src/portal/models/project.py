"""Project model - company-scoped entity."""

from datetime import date, datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.portal.models.base import utc_now
from src.portal.models.enums import ProjectStatus


class Project(SQLModel, table=True):
    """Project owned by a company.

    Projects carry no client_id; a client reaches them through the
    company that owns both.
    """

    __tablename__ = "projects"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    company_id: str = Field(max_length=64, index=True)
    title: str = Field(max_length=200)
    address: str | None = Field(default=None, max_length=500)
    description: str | None = Field(default=None, max_length=2000)
    status: str = Field(default=ProjectStatus.ACTIVE.value, max_length=20)
    start_date: date | None = Field(default=None)
    end_date: date | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    deleted_at: datetime | None = Field(default=None)
