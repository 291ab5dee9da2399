"""Repository for Project entity."""

from collections.abc import Iterable
from uuid import UUID

from sqlmodel import col, select

from src.portal.models.project import Project
from src.portal.repositories.base import OwnedRepository


class ProjectRepository(OwnedRepository[Project]):
    """Projects are scoped by company only."""

    model = Project
    resource_name = "Project"
    client_scoped = False

    async def list_by_ids(self, company_id: str, project_ids: Iterable[UUID]) -> list[Project]:
        """Load the company's live projects among the given ids."""
        ids = list(project_ids)
        if not ids:
            return []
        result = await self.session.execute(
            select(Project)
            .where(col(Project.id).in_(ids), *self._scope(company_id, None))
            .order_by(col(Project.created_at).desc())
        )
        return list(result.scalars().all())
