"""Portal token service - issuing, resolving and revoking link tokens."""

from datetime import datetime, timedelta
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.portal.core.config import get_settings
from src.portal.core.exceptions import (
    ForbiddenError,
    NotFoundError,
    PersistenceError,
    UnauthorizedError,
)
from src.portal.core.logging import get_logger
from src.portal.core.security import generate_portal_token, hash_token
from src.portal.models.base import utc_now
from src.portal.models.enums import TokenSource
from src.portal.models.token import PortalToken
from src.portal.repositories import PortalTokenRepository
from src.portal.schemas.session import PortalSession

logger = get_logger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class PortalTokenService:
    """Issues portal tokens and turns presented tokens into sessions.

    Resolution never writes: tokens stay valid until they expire or are
    revoked, and any number of live tokens may exist per client.
    """

    def __init__(self, token_repo: PortalTokenRepository, session: AsyncSession):
        self.token_repo = token_repo
        self.session = session

    async def create_token(
        self,
        company_id: str,
        client_id: str,
        email: str,
        source: TokenSource = TokenSource.SELF_SERVICE,
    ) -> tuple[PortalToken, str]:
        """Create a token bound to (company_id, client_id, email).

        Returns (token, plaintext_secret). The caller is expected to have
        resolved company_id and client_id already; they are not checked here.
        """
        settings = get_settings()
        secret = generate_portal_token()
        now = utc_now()
        token = PortalToken(
            company_id=company_id,
            client_id=client_id,
            email=normalize_email(email),
            token_hash=hash_token(secret),
            source=source.value,
            created_at=now,
            expires_at=now + timedelta(days=settings.portal_token_expire_days),
        )

        try:
            self.token_repo.add(token)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to persist portal token",
                company_id=company_id,
                client_id=client_id,
                error=str(e),
            )
            raise PersistenceError("Failed to create portal token") from e

        logger.info(
            "Portal token issued",
            token_id=str(token.id),
            company_id=company_id,
            client_id=client_id,
            source=source.value,
        )
        return token, secret

    async def resolve_token(self, raw_token: str | None) -> PortalToken:
        """Look up a live token by its secret.

        Missing, unknown, expired and revoked tokens all raise the same
        UnauthorizedError; the reason only goes to the log.
        """
        if not raw_token:
            raise self._rejected("missing")

        token = await self.token_repo.get_by_hash(hash_token(raw_token))
        if token is None:
            raise self._rejected("unknown")
        if token.is_revoked:
            raise self._rejected("revoked", token)
        if token.is_expired(utc_now()):
            raise self._rejected("expired", token)
        return token

    async def resolve(self, raw_token: str | None) -> PortalSession:
        """Resolve a presented token into a per-request PortalSession."""
        token = await self.resolve_token(raw_token)
        return self._to_session(token)

    async def verify(self, raw_token: str, email: str) -> tuple[PortalSession, datetime]:
        """Resolve a token and confirm the client knows the bound email.

        Returns (session, token expiry). An email mismatch is reported
        exactly like an invalid token.
        """
        token = await self.resolve_token(raw_token)
        if normalize_email(email) != normalize_email(token.email):
            raise self._rejected("email_mismatch", token)
        return self._to_session(token), token.expires_at

    async def revoke(self, token_id: UUID, company_id: str) -> PortalToken:
        """Revoke a token issued by company_id. Revoking twice is a no-op."""
        token = await self.token_repo.get_by_id(token_id)
        if token is None:
            raise NotFoundError("Token not found")
        if token.company_id != company_id:
            logger.warning(
                "Cross-scope access denied",
                resource="PortalToken",
                resource_id=str(token_id),
                company_id=company_id,
            )
            raise ForbiddenError()

        try:
            revoked = await self.token_repo.revoke(token_id)
            await self.session.commit()
            await self.session.refresh(token)
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Failed to revoke portal token", token_id=str(token_id), error=str(e))
            raise PersistenceError("Failed to revoke portal token") from e

        if revoked:
            logger.info("Portal token revoked", token_id=str(token_id), company_id=company_id)
        return token

    @staticmethod
    def _to_session(token: PortalToken) -> PortalSession:
        return PortalSession(
            client_id=token.client_id,
            company_id=token.company_id,
            email=token.email,
            token_id=token.id,
        )

    @staticmethod
    def _rejected(reason: str, token: PortalToken | None = None) -> UnauthorizedError:
        logger.info(
            "Portal token rejected",
            reason=reason,
            token_id=str(token.id) if token else None,
        )
        return UnauthorizedError()
