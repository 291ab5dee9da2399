"""Portal access token and branding models."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.portal.models.base import utc_now
from src.portal.models.enums import TokenSource

DEFAULT_ACCENT_COLOR = "#417394"


class PortalToken(SQLModel, table=True):
    """Opaque link credential bound to one (company, client) pair.

    Only the SHA-256 of the secret is stored; the plaintext leaves the
    system once, inside the emailed link.
    """

    __tablename__ = "portal_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    company_id: str = Field(max_length=64, index=True)
    client_id: str = Field(max_length=64, index=True)
    email: str = Field(max_length=255)
    token_hash: str = Field(max_length=64, unique=True, index=True)
    source: str = Field(default=TokenSource.SELF_SERVICE.value, max_length=20)
    created_at: datetime = Field(default_factory=utc_now)
    expires_at: datetime
    revoked_at: datetime | None = Field(default=None)

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    @property
    def is_revoked(self) -> bool:
        return self.revoked_at is not None


class PortalBranding(SQLModel, table=True):
    """Per-company look of the portal and of its link emails."""

    __tablename__ = "portal_branding"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    company_id: str = Field(max_length=64, unique=True, index=True)
    logo_url: str | None = Field(default=None, max_length=2048)
    accent_color: str = Field(default=DEFAULT_ACCENT_COLOR, max_length=16)
    welcome_message: str | None = Field(default=None, max_length=2000)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
