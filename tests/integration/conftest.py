"""Integration test fixtures for database and HTTP client operations.

Store-backed tests run against a throwaway SQLite file per test (aiosqlite),
created from the SQLModel metadata. The application engine singleton is
pointed at the same database so HTTP requests and test code share data.
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlmodel import SQLModel

import src.portal.models  # noqa: F401 - registers tables on the metadata
from src.portal.api.dependencies import get_email_sender, get_payment_gateway
from src.portal.core.db import engine as engine_module
from src.portal.core.health import reset_health_cache
from src.portal.main import create_app
from tests.fakes import FakeEmailSender, FakePaymentGateway


@pytest.fixture
async def engine(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[AsyncEngine]:
    """Create a fresh database with all portal tables."""
    test_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'portal.db'}")
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    monkeypatch.setattr(engine_module, "_engine", test_engine)

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for database operations.

    The session does not auto-commit; use tests.helpers.persist or call
    `await session.commit()` to make data visible to requests.
    """
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
async def client(
    engine: AsyncEngine,
    fake_gateway: FakePaymentGateway,
    email_outbox: FakeEmailSender,
) -> AsyncGenerator[AsyncClient]:
    """HTTP client for the full application with fake gateway and email sender."""
    reset_health_cache()

    app = create_app()
    app.dependency_overrides[get_payment_gateway] = lambda: fake_gateway
    app.dependency_overrides[get_email_sender] = lambda: email_outbox

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    reset_health_cache()
