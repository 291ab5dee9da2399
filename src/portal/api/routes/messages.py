"""Client messaging endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.portal.api.dependencies import MessageServiceDep, PortalSessionDep
from src.portal.schemas import (
    MarkReadResponse,
    MessageListResponse,
    MessageRead,
    SendMessageRequest,
)

router = APIRouter(prefix="/messages", tags=["portal-messages"])


@router.get(
    "",
    response_model=MessageListResponse,
    summary="List messages",
    description=(
        "One page of the client's conversation with the company, newest first. "
        "Filter by projectId, estimateId or invoiceId to see messages about one record."
    ),
)
async def list_messages(
    portal_session: PortalSessionDep,
    service: MessageServiceDep,
    limit: Annotated[int, Query(ge=1, le=100)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
    project_id: Annotated[UUID | None, Query(alias="projectId")] = None,
    estimate_id: Annotated[UUID | None, Query(alias="estimateId")] = None,
    invoice_id: Annotated[UUID | None, Query(alias="invoiceId")] = None,
) -> MessageListResponse:
    messages = await service.list_messages(
        portal_session,
        limit=limit,
        offset=offset,
        project_id=project_id,
        estimate_id=estimate_id,
        invoice_id=invoice_id,
    )
    return MessageListResponse(
        messages=[MessageRead.model_validate(m) for m in messages],
        limit=limit,
        offset=offset,
    )


@router.post(
    "",
    response_model=MessageRead,
    status_code=status.HTTP_201_CREATED,
    summary="Send a message",
    responses={
        400: {"description": "Message content is missing or blank"},
        403: {"description": "A referenced record belongs to another client"},
        404: {"description": "A referenced record does not exist"},
    },
)
async def send_message(
    data: SendMessageRequest,
    portal_session: PortalSessionDep,
    service: MessageServiceDep,
) -> MessageRead:
    message = await service.send_message(
        portal_session,
        data.content,
        project_id=data.project_id,
        estimate_id=data.estimate_id,
        invoice_id=data.invoice_id,
    )
    return MessageRead.model_validate(message)


@router.post(
    "/read",
    response_model=MarkReadResponse,
    summary="Mark messages read",
    description="Mark every company message to this client as read.",
)
async def mark_messages_read(
    portal_session: PortalSessionDep,
    service: MessageServiceDep,
) -> MarkReadResponse:
    updated = await service.mark_read(portal_session)
    return MarkReadResponse(updated=updated)
