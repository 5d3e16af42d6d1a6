"""
Repository for Emission database operations.

Every query is scoped to an owner. Lookups by id always carry the owner in the
same WHERE clause, so a record that exists but belongs to someone else is
indistinguishable from one that does not exist.
"""
from datetime import datetime
from typing import Any, List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import Row, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_tracker.database.repositories.base import BaseRepository
from carbon_tracker.database.schemas import EmissionDBModel


class EmissionRepository(BaseRepository[EmissionDBModel]):
    """Repository for logged emission operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(EmissionDBModel, session)

    async def get_owned(
        self, emission_id: UUID, user_id: UUID
    ) -> Optional[EmissionDBModel]:
        """
        Get an emission by ID if it belongs to the user.

        Returns:
            Emission if found and owned, None otherwise
        """
        stmt = select(self.model).where(
            self.model.id == emission_id, self.model.user_id == user_id
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def delete_owned(self, emission_id: UUID, user_id: UUID) -> bool:
        """
        Delete an emission if it belongs to the user.

        Returns:
            True if a row was deleted, False otherwise
        """
        stmt = delete(self.model).where(
            self.model.id == emission_id, self.model.user_id == user_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    def _filtered(
        self,
        stmt,
        user_id: UUID,
        category: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ):
        stmt = stmt.where(self.model.user_id == user_id)
        if category:
            stmt = stmt.where(self.model.category == category)
        if start_date is not None:
            stmt = stmt.where(self.model.date >= start_date)
        if end_date is not None:
            stmt = stmt.where(self.model.date <= end_date)
        return stmt

    async def list_for_user(
        self,
        user_id: UUID,
        skip: int = 0,
        limit: int = 10,
        category: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> Tuple[List[EmissionDBModel], int]:
        """
        Get one page of a user's emissions, newest first, with the total count.

        Args:
            user_id: Owner UUID
            skip: Number of records to skip
            limit: Maximum number of records to return
            category: Optional category filter
            start_date: Optional lower bound on date (inclusive)
            end_date: Optional upper bound on date (inclusive)

        Returns:
            (emissions on the page, total matching emissions)
        """
        filters = dict(category=category, start_date=start_date, end_date=end_date)

        stmt = self._filtered(select(self.model), user_id, **filters)
        stmt = (
            stmt.order_by(self.model.date.desc(), self.model.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self.session.execute(stmt)

        count_stmt = self._filtered(
            select(func.count()).select_from(self.model), user_id, **filters
        )
        total = (await self.session.execute(count_stmt)).scalar() or 0

        return list(result.scalars().all()), total

    async def sum_co2e_by(
        self, user_id: UUID, start: datetime, end: datetime, *keys
    ) -> Sequence[Row[Any]]:
        """
        Sum co2e and count a user's emissions in [start, end] per distinct key.

        Args:
            user_id: Owner UUID
            start: Lower bound on date (inclusive)
            end: Upper bound on date (inclusive)
            *keys: Labelled column expressions to group by

        Returns:
            Rows of (*keys, total, records), ordered by the first occurrence of
            each key in the window
        """
        stmt = (
            self._filtered(
                select(
                    *keys,
                    func.sum(self.model.co2e).label("total"),
                    func.count().label("records"),
                ),
                user_id,
                start_date=start,
                end_date=end,
            )
            .group_by(*keys)
            .order_by(func.min(self.model.date), func.min(self.model.created_at))
        )
        result = await self.session.execute(stmt)
        return result.all()

    async def get_recent(
        self, user_id: UUID, since: datetime, limit: int = 100
    ) -> List[EmissionDBModel]:
        """
        Get a user's most recent emissions dated on or after `since`.
        """
        stmt = (
            self._filtered(select(self.model), user_id, start_date=since)
            .order_by(self.model.date.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
