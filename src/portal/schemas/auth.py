"""Portal access schemas - link issuing and token verification."""

from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from src.portal.schemas.base import CamelModel


class SendLinkRequest(CamelModel):
    """Request a portal link for a client."""

    company_id: str = Field(min_length=1, max_length=64)
    client_id: str = Field(min_length=1, max_length=64)
    email: EmailStr
    company_name: str | None = Field(default=None, max_length=200)

    @field_validator("company_id", "client_id")
    @classmethod
    def validate_identifier(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Identifier cannot be empty or whitespace only")
        return v

    @field_validator("company_name")
    @classmethod
    def validate_company_name(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                return None
        return v


class ShareRequest(SendLinkRequest):
    """Staff-initiated variant of SendLinkRequest."""


class SendLinkResponse(CamelModel):
    success: bool = True
    token_id: UUID


class ValidateTokenResponse(CamelModel):
    valid: bool
    company_id: str | None = None


class VerifyRequest(CamelModel):
    token: str = Field(min_length=1, max_length=512)
    email: EmailStr


class VerifyResponse(CamelModel):
    success: bool = True
    client_id: str
    company_id: str
