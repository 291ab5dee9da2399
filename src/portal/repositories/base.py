"""Base repositories with common and ownership-scoped operations."""

from typing import Any, ClassVar
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select


class BaseRepository[ModelType: SQLModel]:
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit)
    should be done in the service layer.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID) -> ModelType | None:
        """Get a record by its primary key."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)


class OwnedRepository[ModelType: SQLModel](BaseRepository[ModelType]):
    """Repository for records that belong to a company (and maybe a client).

    Every read filters by owner in the query itself, so rows from another
    scope are never loaded. Soft-deleted rows are invisible.
    """

    resource_name: ClassVar[str] = "Resource"
    client_scoped: ClassVar[bool] = True

    def _live(self) -> Any:
        return self.model.deleted_at.is_(None)  # type: ignore[attr-defined]

    def _scope(self, company_id: str, client_id: str | None) -> list[Any]:
        clauses = [self.model.company_id == company_id, self._live()]  # type: ignore[attr-defined]
        if self.client_scoped:
            if client_id is None:
                raise ValueError(f"{self.resource_name} lookups require a client_id")
            clauses.append(self.model.client_id == client_id)  # type: ignore[attr-defined]
        return clauses

    async def get_scoped(
        self, id: UUID, company_id: str, client_id: str | None = None
    ) -> ModelType | None:
        """Get a live record by id, constrained to the owner scope."""
        result = await self.session.execute(
            select(self.model).where(
                self.model.id == id,  # type: ignore[attr-defined]
                *self._scope(company_id, client_id),
            )
        )
        return result.scalar_one_or_none()

    async def exists(self, id: UUID) -> bool:
        """Check whether a live record with this id exists in any scope.

        Only the id column is read.
        """
        result = await self.session.execute(
            select(self.model.id).where(  # type: ignore[attr-defined]
                self.model.id == id,  # type: ignore[attr-defined]
                self._live(),
            )
        )
        return result.scalar_one_or_none() is not None
