"""Portal access endpoints - link requests, token checks and the session cookie."""

from typing import Annotated

from fastapi import APIRouter, Query, Response, status
from starlette.requests import Request

from src.portal.api.dependencies import LinkServiceDep, TokenServiceDep
from src.portal.core.config import get_settings
from src.portal.core.exceptions import ForbiddenError, UnauthorizedError
from src.portal.core.rate_limit import limiter
from src.portal.models.base import utc_now
from src.portal.models.enums import TokenSource
from src.portal.schemas import (
    SendLinkRequest,
    SendLinkResponse,
    SuccessResponse,
    ValidateTokenResponse,
    VerifyRequest,
    VerifyResponse,
)

router = APIRouter(prefix="/auth", tags=["portal-auth"])


@router.post(
    "/send-link",
    response_model=SendLinkResponse,
    summary="Email a portal link",
    description="Issue a portal token for a client and email the link to them.",
    responses={
        200: {"description": "Link issued and emailed"},
        400: {"description": "Missing or malformed fields"},
        403: {"description": "Self-service links are disabled"},
        429: {"description": "Too many link requests"},
        500: {"description": "Token could not be stored or email could not be sent"},
    },
)
@limiter.limit(get_settings().send_link_rate_limit)
async def send_link(
    request: Request,
    data: SendLinkRequest,
    service: LinkServiceDep,
) -> SendLinkResponse:
    if not get_settings().portal_self_service_enabled:
        raise ForbiddenError("Self-service portal links are disabled")

    token = await service.send_link(
        company_id=data.company_id,
        client_id=data.client_id,
        email=data.email,
        company_name=data.company_name,
        source=TokenSource.SELF_SERVICE,
    )
    return SendLinkResponse(token_id=token.id)


@router.get(
    "/validate-token",
    response_model=ValidateTokenResponse,
    response_model_exclude_none=True,
    summary="Check a portal token",
    description="Report whether a token is usable. Never says why a token is not.",
)
async def validate_token(
    token_service: TokenServiceDep,
    token: Annotated[str | None, Query(max_length=512)] = None,
) -> ValidateTokenResponse:
    try:
        portal_session = await token_service.resolve(token)
    except UnauthorizedError:
        return ValidateTokenResponse(valid=False)
    return ValidateTokenResponse(valid=True, company_id=portal_session.company_id)


@router.post(
    "/verify",
    response_model=VerifyResponse,
    summary="Verify token and email",
    description=(
        "Confirm the client knows the email the token was issued to and set the "
        "portal session cookie for the rest of the token's lifetime."
    ),
    responses={
        200: {"description": "Verified; session cookie set"},
        401: {"description": "Token invalid, expired, revoked or email mismatch"},
    },
)
async def verify(
    data: VerifyRequest,
    response: Response,
    token_service: TokenServiceDep,
) -> VerifyResponse:
    settings = get_settings()
    portal_session, expires_at = await token_service.verify(data.token, data.email)

    max_age = max(int((expires_at - utc_now()).total_seconds()), 0)
    response.set_cookie(
        key=settings.portal_cookie_name,
        value=data.token,
        max_age=max_age,
        httponly=True,
        secure=settings.portal_cookie_secure,
        samesite="lax",
        path="/",
    )
    return VerifyResponse(
        client_id=portal_session.client_id,
        company_id=portal_session.company_id,
    )


@router.post(
    "/logout",
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
    summary="Clear the portal session cookie",
)
async def logout(response: Response) -> SuccessResponse:
    settings = get_settings()
    response.delete_cookie(
        key=settings.portal_cookie_name,
        path="/",
        httponly=True,
        secure=settings.portal_cookie_secure,
        samesite="lax",
    )
    return SuccessResponse()
