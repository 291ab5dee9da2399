"""Ownership checks shared by every portal accessor and mutation."""

from uuid import UUID

from sqlmodel import SQLModel

from src.portal.core.exceptions import ForbiddenError, NotFoundError
from src.portal.core.logging import get_logger
from src.portal.repositories.base import OwnedRepository
from src.portal.schemas.session import PortalSession

logger = get_logger(__name__)


async def fetch_owned[ModelType: SQLModel](
    repo: OwnedRepository[ModelType],
    resource_id: UUID,
    company_id: str,
    client_id: str | None = None,
) -> ModelType:
    """Load a record only if it belongs to the given owner scope.

    The lookup is filtered by owner in the query. When it comes back empty,
    an id-only existence check separates "no such record" (NotFoundError)
    from "not yours" (ForbiddenError). Out-of-scope rows are never loaded.
    """
    record = await repo.get_scoped(resource_id, company_id, client_id)
    if record is not None:
        return record

    if await repo.exists(resource_id):
        logger.warning(
            "Cross-scope access denied",
            resource=repo.resource_name,
            resource_id=str(resource_id),
            company_id=company_id,
            client_id=client_id,
        )
        raise ForbiddenError()
    raise NotFoundError(f"{repo.resource_name} not found")


async def fetch_for_session[ModelType: SQLModel](
    repo: OwnedRepository[ModelType],
    resource_id: UUID,
    portal_session: PortalSession,
) -> ModelType:
    """fetch_owned scoped to the session's company, and client where the record has one."""
    client_id = portal_session.client_id if repo.client_scoped else None
    return await fetch_owned(repo, resource_id, portal_session.company_id, client_id)
