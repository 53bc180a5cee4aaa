"""
Shared repository base.

Users and projects are looked up by their public identifiers (`emp_id`,
`project_id`) rather than by primary key, so the base class only offers
keyword lookups, counting and flush-on-write helpers. Committing is left
to the service layer, which commits once per operation.

Usage:
    class UserRepository(BaseRepository[User]):
        def __init__(self, db: AsyncSession):
            super().__init__(db, User)

        async def get_by_emp_id(self, emp_id: str) -> User | None:
            return await self.get_by(emp_id=emp_id)
"""

from typing import TypeVar, Generic, Type
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """Keyword lookups and flushed writes for one mapped model."""

    def __init__(self, db: AsyncSession, model: Type[T]):
        self.db = db
        self.model = model

    def _filtered(self, query, filters: dict):
        for key, value in filters.items():
            query = query.where(getattr(self.model, key) == value)
        return query

    async def get_by(self, **filters) -> T | None:
        """
        Single row matching all `filters`, or None.

        Raises:
            MultipleResultsFound: filters are not unique for the model
        """
        result = await self.db.execute(self._filtered(select(self.model), filters))
        return result.scalar_one_or_none()

    async def count(self, **filters) -> int:
        """Number of rows matching `filters` (all rows when none given)."""
        query = self._filtered(select(func.count()).select_from(self.model), filters)
        result = await self.db.execute(query)
        return result.scalar() or 0

    async def create(self, **fields) -> T:
        """Add a row, flush it and reload server-side defaults."""
        entity = self.model(**fields)
        self.db.add(entity)
        await self.db.flush()
        await self.db.refresh(entity)
        return entity

    async def update(self, entity: T, **fields) -> T:
        """Set fields on a loaded row and flush."""
        for key, value in fields.items():
            setattr(entity, key, value)
        await self.db.flush()
        await self.db.refresh(entity)
        return entity
