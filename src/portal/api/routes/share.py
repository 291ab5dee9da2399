"""Staff endpoints - share portal links and revoke tokens.

Admitted by an admin bearer token from the staff identity provider,
never by a portal session.
"""

from uuid import UUID

from fastapi import APIRouter

from src.portal.api.dependencies import AdminDep, LinkServiceDep, TokenServiceDep
from src.portal.core.exceptions import ForbiddenError
from src.portal.core.logging import get_logger
from src.portal.models.enums import TokenSource
from src.portal.schemas import SendLinkResponse, ShareRequest, SuccessResponse

logger = get_logger(__name__)

router = APIRouter(tags=["portal-admin"])


@router.post(
    "/share",
    response_model=SendLinkResponse,
    summary="Share a portal link",
    description="Issue a portal token for a client of the caller's company and email it.",
    responses={
        200: {"description": "Link issued and emailed"},
        401: {"description": "Missing or invalid admin token"},
        403: {"description": "Company is not the caller's company"},
    },
)
async def share(
    data: ShareRequest,
    admin: AdminDep,
    service: LinkServiceDep,
) -> SendLinkResponse:
    if data.company_id != admin.company_id:
        logger.warning(
            "Cross-scope access denied",
            resource="Company",
            company_id=data.company_id,
            admin_company_id=admin.company_id,
        )
        raise ForbiddenError()

    token = await service.send_link(
        company_id=data.company_id,
        client_id=data.client_id,
        email=data.email,
        company_name=data.company_name,
        source=TokenSource.SHARE,
    )
    logger.info("Portal link shared", token_id=str(token.id), shared_by=admin.subject)
    return SendLinkResponse(token_id=token.id)


@router.post(
    "/tokens/{token_id}/revoke",
    response_model=SuccessResponse,
    summary="Revoke a portal token",
    responses={
        200: {"description": "Token revoked (or already revoked)"},
        403: {"description": "Token belongs to another company"},
        404: {"description": "Token not found"},
    },
)
async def revoke_token(
    token_id: UUID,
    admin: AdminDep,
    token_service: TokenServiceDep,
) -> SuccessResponse:
    await token_service.revoke(token_id, admin.company_id)
    return SuccessResponse()
