"""Portal overview endpoint."""

from fastapi import APIRouter

from src.portal.api.dependencies import PortalServiceDep, PortalSessionDep
from src.portal.schemas import (
    BrandingRead,
    EstimateSummary,
    InvoiceRead,
    PortalDataResponse,
    ProjectSummary,
)

router = APIRouter(tags=["portal"])


@router.get(
    "/data",
    response_model=PortalDataResponse,
    summary="Portal overview",
    description=(
        "Branding plus the client's sent estimates, issued invoices and their projects, "
        "with per-project counts and the number of unread company messages."
    ),
)
async def get_portal_data(
    portal_session: PortalSessionDep,
    service: PortalServiceDep,
) -> PortalDataResponse:
    overview = await service.get_overview(portal_session)
    return PortalDataResponse(
        client_id=portal_session.client_id,
        company_id=portal_session.company_id,
        branding=BrandingRead.model_validate(overview.branding),
        projects=[
            ProjectSummary.model_validate(p).model_copy(
                update={
                    "estimate_count": overview.estimate_counts[p.id],
                    "invoice_count": overview.invoice_counts[p.id],
                }
            )
            for p in overview.projects
        ],
        estimates=[
            EstimateSummary.model_validate(e).model_copy(
                update={"has_unanswered_questions": e.id in overview.unanswered_estimate_ids}
            )
            for e in overview.estimates
        ],
        invoices=[InvoiceRead.model_validate(i) for i in overview.invoices],
        unread_messages=overview.unread_messages,
    )
