"""Tests for portal token service error paths using mocked persistence."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from src.portal.core.exceptions import ForbiddenError, NotFoundError, PersistenceError
from src.portal.core.security import hash_token
from src.portal.services.token_service import PortalTokenService, normalize_email
from tests.factories import PortalTokenFactory

pytestmark = pytest.mark.unit


@pytest.fixture
def token_repo() -> MagicMock:
    repo = MagicMock()
    repo.get_by_hash = AsyncMock(return_value=None)
    repo.get_by_id = AsyncMock(return_value=None)
    repo.revoke = AsyncMock(return_value=1)
    return repo


@pytest.fixture
def session() -> MagicMock:
    session = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.refresh = AsyncMock()
    return session


class TestNormalizeEmail:
    def test_strips_and_lowercases(self):
        assert normalize_email("  Client@Example.COM ") == "client@example.com"


class TestCreateTokenFailures:
    async def test_commit_failure_raises_persistence_error(self, token_repo, session):
        session.commit.side_effect = OperationalError("INSERT", {}, Exception("disk full"))
        service = PortalTokenService(token_repo, session)

        with pytest.raises(PersistenceError) as exc_info:
            await service.create_token("company-a", "client-a", "client@example.com")

        assert exc_info.value.message == "Failed to create portal token"
        session.rollback.assert_awaited_once()

    async def test_stores_only_the_hash(self, token_repo, session):
        service = PortalTokenService(token_repo, session)

        token, secret = await service.create_token("company-a", "client-a", "Client@Example.com")

        token_repo.add.assert_called_once_with(token)
        assert token.token_hash == hash_token(secret)
        assert secret not in token.token_hash
        assert token.email == "client@example.com"


class TestRevokeFailures:
    async def test_unknown_token(self, token_repo, session):
        service = PortalTokenService(token_repo, session)
        with pytest.raises(NotFoundError):
            await service.revoke(uuid4(), "company-a")

    async def test_other_company(self, token_repo, session):
        token_repo.get_by_id.return_value = PortalTokenFactory.build(company_id="company-b")
        service = PortalTokenService(token_repo, session)

        with pytest.raises(ForbiddenError):
            await service.revoke(uuid4(), "company-a")
        token_repo.revoke.assert_not_called()

    async def test_commit_failure_raises_persistence_error(self, token_repo, session):
        token_repo.get_by_id.return_value = PortalTokenFactory.build()
        session.commit.side_effect = OperationalError("UPDATE", {}, Exception("locked"))
        service = PortalTokenService(token_repo, session)

        with pytest.raises(PersistenceError):
            await service.revoke(uuid4(), "company-a")
        session.rollback.assert_awaited_once()
