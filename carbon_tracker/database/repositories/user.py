"""
Repository for User database operations.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_tracker.database.repositories.base import BaseRepository
from carbon_tracker.database.schemas import UserDBModel


class UserRepository(BaseRepository[UserDBModel]):
    """Repository for account operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(UserDBModel, session)

    async def get_by_email(self, email: str) -> Optional[UserDBModel]:
        stmt = select(self.model).where(self.model.email == email.lower())
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def find_taken_identity(self, username: str, email: str) -> Optional[str]:
        """
        Check whether a username or email is already registered.

        Returns:
            "username" or "email" for the first field in use, None if both are free
        """
        stmt = select(self.model).where(
            or_(self.model.username == username, self.model.email == email.lower())
        )
        result = await self.session.execute(stmt)
        existing = result.scalars().first()

        if existing is None:
            return None
        return "username" if existing.username == username else "email"

    async def touch_last_active(self, user: UserDBModel) -> UserDBModel:
        return await self.apply_changes(user, last_active=datetime.utcnow())
