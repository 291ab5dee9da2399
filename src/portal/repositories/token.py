"""Repositories for portal tokens and branding."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select

from src.portal.models.base import utc_now
from src.portal.models.token import PortalBranding, PortalToken
from src.portal.repositories.base import BaseRepository


class PortalTokenRepository(BaseRepository[PortalToken]):
    """Token store. Lookups go through the SHA-256 of the secret."""

    model = PortalToken

    async def get_by_hash(self, token_hash: str) -> PortalToken | None:
        """Get portal token by its hash."""
        result = await self.session.execute(
            select(PortalToken).where(PortalToken.token_hash == token_hash)
        )
        return result.scalar_one_or_none()

    async def revoke(self, token_id: UUID, revoked_at: datetime | None = None) -> int:
        """Mark a token revoked. Already revoked tokens keep their timestamp.

        Returns the number of tokens revoked.
        """
        stmt = (
            update(PortalToken)
            .where(PortalToken.id == token_id)  # type: ignore[arg-type]
            .where(PortalToken.revoked_at.is_(None))  # type: ignore[union-attr]
            .values(revoked_at=revoked_at or utc_now())
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0  # type: ignore[attr-defined]


class PortalBrandingRepository(BaseRepository[PortalBranding]):
    model = PortalBranding

    async def get_by_company(self, company_id: str) -> PortalBranding | None:
        result = await self.session.execute(
            select(PortalBranding).where(PortalBranding.company_id == company_id)
        )
        return result.scalar_one_or_none()

    async def get_for_company(self, company_id: str) -> PortalBranding:
        """Get stored branding, or an unsaved default for companies without one."""
        branding = await self.get_by_company(company_id)
        if branding is None:
            return PortalBranding(company_id=company_id)
        return branding
