"""Project endpoints."""

from uuid import UUID

from fastapi import APIRouter

from src.portal.api.dependencies import PortalServiceDep, PortalSessionDep
from src.portal.schemas import ProjectRead

router = APIRouter(prefix="/projects", tags=["portal-projects"])


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Get project",
    responses={
        403: {"description": "Project belongs to another company"},
        404: {"description": "Project not found"},
    },
)
async def get_project(
    project_id: UUID,
    portal_session: PortalSessionDep,
    service: PortalServiceDep,
) -> ProjectRead:
    project = await service.get_project(project_id, portal_session)
    return ProjectRead.model_validate(project)
