"""Authentication dependencies - portal sessions and staff principals."""

from typing import Annotated

from fastapi import Depends, Header, Request

from src.portal.api.dependencies.services import TokenServiceDep
from src.portal.core.config import get_settings
from src.portal.core.exceptions import UnauthorizedError
from src.portal.core.logging import bind_portal_context, get_logger
from src.portal.core.security import AdminPrincipal, decode_admin_token
from src.portal.schemas.session import PortalSession

logger = get_logger(__name__)


def extract_portal_token(request: Request) -> str | None:
    """Read the raw portal token from the header carrier, then the cookie."""
    settings = get_settings()
    token = request.headers.get(settings.portal_token_header)
    if token:
        return token.strip()
    return request.cookies.get(settings.portal_cookie_name)


async def require_portal_session(
    request: Request,
    token_service: TokenServiceDep,
) -> PortalSession:
    """Admit a request only with a live portal token.

    No token and a bad token produce the same 401.
    """
    portal_session = await token_service.resolve(extract_portal_token(request))
    bind_portal_context(
        client_id=portal_session.client_id,
        company_id=portal_session.company_id,
        email=portal_session.email,
    )
    return portal_session


async def require_admin(
    authorization: Annotated[str | None, Header()] = None,
) -> AdminPrincipal:
    """Admit staff requests carrying a valid admin bearer token."""
    if not authorization or not authorization.startswith("Bearer "):
        raise UnauthorizedError("Missing or invalid authorization header")

    principal = decode_admin_token(authorization[7:])
    if principal is None:
        logger.info("Admin token rejected")
        raise UnauthorizedError("Invalid or expired token")
    return principal


PortalSessionDep = Annotated[PortalSession, Depends(require_portal_session)]
AdminDep = Annotated[AdminPrincipal, Depends(require_admin)]
