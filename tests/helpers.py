"""Test helper functions for common data creation patterns."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from src.portal.core.config import get_settings
from src.portal.core.security import ADMIN_TOKEN_TYPE
from src.portal.models import PortalToken
from src.portal.schemas.session import PortalSession
from tests.factories import PortalTokenFactory

COMPANY_A = "company-a"
COMPANY_B = "company-b"
CLIENT_A = "client-a"
CLIENT_B = "client-b"


def make_portal_session(
    company_id: str = COMPANY_A,
    client_id: str = CLIENT_A,
    email: str = "client@example.com",
) -> PortalSession:
    return PortalSession(client_id=client_id, company_id=company_id, email=email, token_id=uuid4())


def create_admin_token(
    subject: str,
    company_id: str,
    expires_delta: timedelta | None = None,
) -> str:
    """Sign a staff JWT the way the identity provider does."""
    settings = get_settings()
    expire = datetime.now(UTC) + (expires_delta or timedelta(minutes=30))
    to_encode = {
        "sub": subject,
        "company_id": company_id,
        "exp": expire,
        "type": ADMIN_TOKEN_TYPE,
    }
    return jwt.encode(
        to_encode,
        settings.admin_jwt_secret_key,
        algorithm=settings.admin_jwt_algorithm,
    )


async def persist[T: SQLModel](session: AsyncSession, record: T) -> T:
    """Add a record, commit and return it."""
    session.add(record)
    await session.commit()
    return record


async def persist_all(session: AsyncSession, *records: SQLModel) -> None:
    session.add_all(records)
    await session.commit()


async def create_token_with_secret(session: AsyncSession, **kwargs) -> tuple[PortalToken, str]:
    """Store a live portal token and return it with its plaintext secret."""
    token, secret = PortalTokenFactory.with_secret(**kwargs)
    await persist(session, token)
    return token, secret


def portal_headers(secret: str) -> dict[str, str]:
    return {"X-Portal-Token": secret}
