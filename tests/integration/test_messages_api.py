"""HTTP tests for the client's message thread."""

from datetime import timedelta
from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlmodel import select

from src.portal.models import MessageSender, PortalMessage
from src.portal.models.base import utc_now
from tests.factories import EstimateFactory, InvoiceFactory, PortalMessageFactory
from tests.helpers import (
    CLIENT_B,
    COMPANY_B,
    create_token_with_secret,
    persist,
    persist_all,
    portal_headers,
)

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


@pytest.fixture
async def headers(db_session: AsyncSession) -> dict[str, str]:
    _, secret = await create_token_with_secret(db_session, email="client@example.com")
    return portal_headers(secret)


def thread(count: int, **kwargs) -> list[PortalMessage]:
    """Messages one minute apart, oldest first."""
    start = utc_now() - timedelta(hours=1)
    return [
        PortalMessageFactory.build(
            content=f"Message {n}", created_at=start + timedelta(minutes=n), **kwargs
        )
        for n in range(count)
    ]


async def stored_messages(engine: AsyncEngine) -> list[PortalMessage]:
    async with AsyncSession(engine) as session:
        result = await session.execute(select(PortalMessage))
        return list(result.scalars().all())


class TestListMessages:
    async def test_newest_first_and_scoped_to_session(
        self, client: AsyncClient, db_session: AsyncSession, headers
    ):
        await persist_all(
            db_session,
            *thread(3),
            PortalMessageFactory.build(client_id=CLIENT_B, content="Other client"),
            PortalMessageFactory.build(company_id=COMPANY_B, content="Other company"),
        )

        response = await client.get("/portal/messages", headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert [m["content"] for m in body["messages"]] == ["Message 2", "Message 1", "Message 0"]
        assert body["limit"] == 50
        assert body["offset"] == 0
        assert body["messages"][0]["senderType"] == "company"

    async def test_pagination(self, client: AsyncClient, db_session: AsyncSession, headers):
        await persist_all(db_session, *thread(5))

        response = await client.get(
            "/portal/messages", headers=headers, params={"limit": 2, "offset": 2}
        )

        body = response.json()
        assert [m["content"] for m in body["messages"]] == ["Message 2", "Message 1"]
        assert (body["limit"], body["offset"]) == (2, 2)

    @pytest.mark.parametrize("params", [{"limit": 0}, {"limit": 101}, {"offset": -1}])
    async def test_rejects_bad_pages(self, client: AsyncClient, headers, params: dict):
        response = await client.get("/portal/messages", headers=headers, params=params)
        assert response.status_code == 400

    async def test_filter_by_estimate(
        self, client: AsyncClient, db_session: AsyncSession, headers
    ):
        estimate = EstimateFactory.build()
        await persist(db_session, estimate)
        about = PortalMessageFactory.build(estimate_id=estimate.id, content="About the estimate")
        await persist_all(db_session, about, PortalMessageFactory.build(content="General"))

        response = await client.get(
            "/portal/messages", headers=headers, params={"estimateId": str(estimate.id)}
        )

        assert [m["id"] for m in response.json()["messages"]] == [str(about.id)]

    async def test_requires_session(self, client: AsyncClient):
        response = await client.get("/portal/messages")
        assert response.status_code == 401


class TestSendMessage:
    async def test_signed_with_session_email(
        self, client: AsyncClient, engine: AsyncEngine, headers
    ):
        response = await client.post(
            "/portal/messages", headers=headers, json={"content": "  When can you start?  "}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["content"] == "When can you start?"
        assert body["senderType"] == "client"
        assert body["senderName"] == "client@example.com"
        assert body["readAt"] is None

        [stored] = await stored_messages(engine)
        assert str(stored.id) == body["id"]
        assert stored.company_id == "company-a"
        assert stored.client_id == "client-a"
        assert stored.sender_type == MessageSender.CLIENT.value

    async def test_about_an_owned_invoice(
        self, client: AsyncClient, db_session: AsyncSession, headers
    ):
        invoice = await persist(db_session, InvoiceFactory.build())

        response = await client.post(
            "/portal/messages",
            headers=headers,
            json={"content": "Paid by cheque", "invoiceId": str(invoice.id)},
        )

        assert response.status_code == 201
        assert response.json()["invoiceId"] == str(invoice.id)

    @pytest.mark.parametrize("payload", [{"content": "   "}, {"content": ""}])
    async def test_blank_content(
        self, client: AsyncClient, engine: AsyncEngine, headers, payload: dict
    ):
        response = await client.post("/portal/messages", headers=headers, json=payload)

        assert response.status_code == 400
        assert response.json()["detail"] == "Message content cannot be empty"
        assert await stored_messages(engine) == []

    @pytest.mark.parametrize("payload", [{}, {"content": "x" * 5001}])
    async def test_malformed_body(self, client: AsyncClient, headers, payload: dict):
        response = await client.post("/portal/messages", headers=headers, json=payload)
        assert response.status_code == 400

    async def test_about_another_clients_estimate(
        self, client: AsyncClient, engine: AsyncEngine, db_session: AsyncSession, headers
    ):
        estimate = await persist(db_session, EstimateFactory.build(client_id=CLIENT_B))

        response = await client.post(
            "/portal/messages",
            headers=headers,
            json={"content": "Hello", "estimateId": str(estimate.id)},
        )

        assert response.status_code == 403
        assert await stored_messages(engine) == []

    async def test_about_a_missing_estimate(self, client: AsyncClient, headers):
        response = await client.post(
            "/portal/messages",
            headers=headers,
            json={"content": "Hello", "estimateId": str(uuid4())},
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Estimate not found"


class TestMarkRead:
    async def test_marks_company_messages_read(
        self, client: AsyncClient, engine: AsyncEngine, db_session: AsyncSession, headers
    ):
        own = PortalMessageFactory.build(
            sender_type=MessageSender.CLIENT.value, sender_name="client@example.com"
        )
        other_client = PortalMessageFactory.build(client_id=CLIENT_B)
        await persist_all(db_session, *thread(2), own, other_client)

        before = await client.get("/portal/data", headers=headers)
        response = await client.post("/portal/messages/read", headers=headers)
        after = await client.get("/portal/data", headers=headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "updated": 2}
        assert before.json()["unreadMessages"] == 2
        assert after.json()["unreadMessages"] == 0

        by_id = {m.id: m for m in await stored_messages(engine)}
        assert by_id[own.id].read_at is None
        assert by_id[other_client.id].read_at is None

    async def test_nothing_unread(self, client: AsyncClient, headers):
        response = await client.post("/portal/messages/read", headers=headers)
        assert response.json() == {"success": True, "updated": 0}
