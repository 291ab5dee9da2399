"""HTTP tests for estimates, invoices, projects and the portal overview."""

from decimal import Decimal
from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from src.portal.core.payments import PaymentGatewayError
from src.portal.models import Estimate, EstimateStatus
from tests.factories import (
    EstimateFactory,
    InvoiceFactory,
    PortalBrandingFactory,
    PortalMessageFactory,
    ProjectFactory,
)
from tests.fakes import FakePaymentGateway
from tests.helpers import (
    CLIENT_B,
    COMPANY_A,
    COMPANY_B,
    create_token_with_secret,
    persist,
    persist_all,
    portal_headers,
)

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


@pytest.fixture
async def headers(db_session: AsyncSession) -> dict[str, str]:
    """Portal headers for client-a of company-a."""
    _, secret = await create_token_with_secret(db_session)
    return portal_headers(secret)


async def stored_estimate(engine: AsyncEngine, estimate_id) -> Estimate:
    async with AsyncSession(engine) as session:
        estimate = await session.get(Estimate, estimate_id)
        assert estimate is not None
        return estimate


class TestEstimates:
    async def test_get_marks_viewed(
        self, client: AsyncClient, engine: AsyncEngine, db_session: AsyncSession, headers
    ):
        estimate = await persist(db_session, EstimateFactory.build())

        response = await client.get(f"/portal/estimates/{estimate.id}", headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == str(estimate.id)
        assert body["estimateNumber"] == estimate.estimate_number
        assert body["total"] == 1250.0
        assert body["viewedAt"] is not None
        assert (await stored_estimate(engine, estimate.id)).viewed_at is not None

    async def test_first_view_is_kept(
        self, client: AsyncClient, engine: AsyncEngine, db_session: AsyncSession, headers
    ):
        estimate = await persist(db_session, EstimateFactory.build())

        await client.get(f"/portal/estimates/{estimate.id}", headers=headers)
        first_view = (await stored_estimate(engine, estimate.id)).viewed_at
        await client.get(f"/portal/estimates/{estimate.id}", headers=headers)

        assert (await stored_estimate(engine, estimate.id)).viewed_at == first_view

    async def test_ownership_matrix(self, client: AsyncClient, db_session: AsyncSession, headers):
        other_client = EstimateFactory.build(client_id=CLIENT_B)
        other_company = EstimateFactory.build(company_id=COMPANY_B)
        deleted = EstimateFactory.deleted()
        await persist_all(db_session, other_client, other_company, deleted)

        cases = [
            (other_client.id, 403, "Access denied"),
            (other_company.id, 403, "Access denied"),
            (deleted.id, 404, "Estimate not found"),
            (uuid4(), 404, "Estimate not found"),
        ]
        for estimate_id, status_code, detail in cases:
            response = await client.get(f"/portal/estimates/{estimate_id}", headers=headers)
            assert response.status_code == status_code
            assert response.json()["detail"] == detail

    async def test_forbidden_view_is_not_recorded(
        self, client: AsyncClient, engine: AsyncEngine, db_session: AsyncSession, headers
    ):
        estimate = await persist(db_session, EstimateFactory.build(client_id=CLIENT_B))

        await client.get(f"/portal/estimates/{estimate.id}", headers=headers)

        assert (await stored_estimate(engine, estimate.id)).viewed_at is None

    async def test_malformed_id(self, client: AsyncClient, headers):
        response = await client.get("/portal/estimates/not-a-uuid", headers=headers)
        assert response.status_code == 400

    async def test_approve(
        self, client: AsyncClient, engine: AsyncEngine, db_session: AsyncSession, headers
    ):
        estimate = await persist(db_session, EstimateFactory.build())

        response = await client.post(f"/portal/estimates/{estimate.id}/approve", headers=headers)

        assert response.status_code == 200
        assert response.json() == {"success": True}
        stored = await stored_estimate(engine, estimate.id)
        assert stored.status == EstimateStatus.APPROVED.value
        assert stored.approved_by == "client-a"

    async def test_approve_twice_conflicts(
        self, client: AsyncClient, db_session: AsyncSession, headers
    ):
        estimate = await persist(db_session, EstimateFactory.build())

        await client.post(f"/portal/estimates/{estimate.id}/approve", headers=headers)
        response = await client.post(f"/portal/estimates/{estimate.id}/approve", headers=headers)

        assert response.status_code == 409
        assert response.json()["detail"] == "Cannot approve estimate in its current state"

    async def test_approve_other_clients_estimate(
        self, client: AsyncClient, engine: AsyncEngine, db_session: AsyncSession, headers
    ):
        estimate = await persist(db_session, EstimateFactory.build(client_id=CLIENT_B))

        response = await client.post(f"/portal/estimates/{estimate.id}/approve", headers=headers)

        assert response.status_code == 403
        assert (await stored_estimate(engine, estimate.id)).status == EstimateStatus.PENDING.value

    async def test_decline_with_reason(
        self, client: AsyncClient, engine: AsyncEngine, db_session: AsyncSession, headers
    ):
        estimate = await persist(db_session, EstimateFactory.build())

        response = await client.post(
            f"/portal/estimates/{estimate.id}/decline",
            headers=headers,
            json={"reason": "  Over budget  "},
        )

        assert response.status_code == 200
        stored = await stored_estimate(engine, estimate.id)
        assert stored.status == EstimateStatus.REJECTED.value
        assert stored.decline_reason == "Over budget"

    async def test_decline_without_body(
        self, client: AsyncClient, engine: AsyncEngine, db_session: AsyncSession, headers
    ):
        estimate = await persist(db_session, EstimateFactory.build())

        response = await client.post(f"/portal/estimates/{estimate.id}/decline", headers=headers)

        assert response.status_code == 200
        assert (await stored_estimate(engine, estimate.id)).decline_reason is None

    async def test_decline_after_approve(
        self, client: AsyncClient, db_session: AsyncSession, headers
    ):
        estimate = await persist(db_session, EstimateFactory.build())

        await client.post(f"/portal/estimates/{estimate.id}/approve", headers=headers)
        response = await client.post(f"/portal/estimates/{estimate.id}/decline", headers=headers)

        assert response.status_code == 409

    async def test_requires_session(self, client: AsyncClient, db_session: AsyncSession):
        estimate = await persist(db_session, EstimateFactory.build())

        response = await client.post(f"/portal/estimates/{estimate.id}/approve")

        assert response.status_code == 401


class TestInvoices:
    async def test_get(self, client: AsyncClient, db_session: AsyncSession, headers):
        invoice = await persist(db_session, InvoiceFactory.build())

        response = await client.get(f"/portal/invoices/{invoice.id}", headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["invoiceNumber"] == invoice.invoice_number
        assert body["balanceDue"] == 500.0
        assert body["amountPaid"] == 0.0

    async def test_other_client(self, client: AsyncClient, db_session: AsyncSession, headers):
        invoice = await persist(db_session, InvoiceFactory.build(client_id=CLIENT_B))

        response = await client.get(f"/portal/invoices/{invoice.id}", headers=headers)

        assert response.status_code == 403

    async def test_pay(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        fake_gateway: FakePaymentGateway,
        headers,
    ):
        invoice = await persist(db_session, InvoiceFactory.build())

        response = await client.post(
            f"/portal/invoices/{invoice.id}/pay", headers=headers, json={"amount": 100}
        )

        assert response.status_code == 200
        assert response.json() == {"clientSecret": "pi_test_1_secret"}
        call = fake_gateway.calls[0]
        assert call["amount_minor"] == 10000
        assert call["metadata"]["invoiceId"] == str(invoice.id)
        assert call["idempotency_key"] is None

    async def test_pay_over_balance(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        fake_gateway: FakePaymentGateway,
        headers,
    ):
        invoice = await persist(db_session, InvoiceFactory.build())

        response = await client.post(
            f"/portal/invoices/{invoice.id}/pay", headers=headers, json={"amount": 600}
        )

        assert response.status_code == 400
        assert (
            response.json()["detail"] == "Payment amount ($600.00) exceeds balance due ($500.00)"
        )
        assert fake_gateway.calls == []

    @pytest.mark.parametrize("payload", [{"amount": "abc"}, {"amount": 0}, {"amount": -5}, {}])
    async def test_pay_rejects_bad_amounts(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        fake_gateway: FakePaymentGateway,
        headers,
        payload: dict,
    ):
        invoice = await persist(db_session, InvoiceFactory.build())

        response = await client.post(
            f"/portal/invoices/{invoice.id}/pay", headers=headers, json=payload
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Amount must be a positive number"
        assert fake_gateway.calls == []

    async def test_pay_with_idempotency_key(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        fake_gateway: FakePaymentGateway,
        headers,
    ):
        invoice = await persist(db_session, InvoiceFactory.build())

        for _ in range(2):
            await client.post(
                f"/portal/invoices/{invoice.id}/pay",
                headers={**headers, "Idempotency-Key": "checkout-42"},
                json={"amount": 50},
            )

        keys = {call["idempotency_key"] for call in fake_gateway.calls}
        assert len(keys) == 1
        assert None not in keys

    async def test_pay_gateway_failure(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        fake_gateway: FakePaymentGateway,
        headers,
    ):
        fake_gateway.error = PaymentGatewayError("card_declined")
        invoice = await persist(db_session, InvoiceFactory.build())

        response = await client.post(
            f"/portal/invoices/{invoice.id}/pay", headers=headers, json={"amount": 10}
        )

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to create payment"


class TestProjects:
    async def test_company_project_visible(
        self, client: AsyncClient, db_session: AsyncSession, headers
    ):
        project = await persist(db_session, ProjectFactory.build(title="Loft conversion"))

        response = await client.get(f"/portal/projects/{project.id}", headers=headers)

        assert response.status_code == 200
        assert response.json()["title"] == "Loft conversion"

    async def test_other_company_project(
        self, client: AsyncClient, db_session: AsyncSession, headers
    ):
        project = await persist(db_session, ProjectFactory.build(company_id=COMPANY_B))

        response = await client.get(f"/portal/projects/{project.id}", headers=headers)

        assert response.status_code == 403


class TestPortalData:
    async def test_overview(self, client: AsyncClient, db_session: AsyncSession, headers):
        project = ProjectFactory.build()
        unrelated_project = ProjectFactory.build()
        await persist_all(
            db_session,
            project,
            unrelated_project,
            PortalBrandingFactory.build(welcome_message="Welcome back"),
        )
        pending = EstimateFactory.build(project_id=project.id)
        draft = EstimateFactory.draft()
        other_client = EstimateFactory.build(client_id=CLIENT_B)
        deleted = EstimateFactory.deleted()
        invoice = InvoiceFactory.build(project_id=project.id, balance_due=Decimal("120.50"))
        other_invoice = InvoiceFactory.build(client_id=CLIENT_B)
        await persist_all(db_session, pending, draft, other_client, deleted, invoice, other_invoice)
        await persist_all(
            db_session,
            PortalMessageFactory.build(),
            PortalMessageFactory.build(read_at=invoice.created_at),
            PortalMessageFactory.build(client_id=CLIENT_B),
        )

        response = await client.get("/portal/data", headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["clientId"] == "client-a"
        assert body["companyId"] == COMPANY_A
        assert body["branding"]["welcomeMessage"] == "Welcome back"
        assert [e["id"] for e in body["estimates"]] == [str(pending.id)]
        assert [i["id"] for i in body["invoices"]] == [str(invoice.id)]
        assert body["invoices"][0]["balanceDue"] == 120.5
        assert [p["id"] for p in body["projects"]] == [str(project.id)]
        assert body["projects"][0]["estimateCount"] == 1
        assert body["projects"][0]["invoiceCount"] == 1
        assert body["estimates"][0]["hasUnansweredQuestions"] is False
        assert body["unreadMessages"] == 1

    async def test_default_branding(self, client: AsyncClient, headers):
        response = await client.get("/portal/data", headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["branding"]["accentColor"] == "#417394"
        assert body["estimates"] == []
        assert body["invoices"] == []
        assert body["projects"] == []
        assert body["unreadMessages"] == 0
