"""
Demo data seeding service.

Creates (or reuses) a demo account and fills it with a year of sample
activities whose CO2e comes from the quantifier.

Usage:
    from carbon_tracker.services.seed_database import DemoSeeder

    async with DemoSeeder() as seeder:
        stats = await seeder.seed_all(clear_existing=True)
"""

import logging
import random
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_tracker.core.security import hash_password
from carbon_tracker.database.repositories import EmissionRepository, UserRepository
from carbon_tracker.database.schemas import EmissionDBModel, UserDBModel
from carbon_tracker.database.session_manager.db_session import Database
from carbon_tracker.services.calculators import EmissionCalculator
from carbon_tracker.services.calculators.emission_factors import DEFAULT_UNITS
from carbon_tracker.utils.constants import EmissionCategory

logger = logging.getLogger(__name__)

DEMO_USERNAME = "demo"
DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "demo-password"

# (category, activity, min quantity, max quantity, weight)
SAMPLE_ACTIVITIES = (
    (EmissionCategory.TRANSPORTATION, "car", 5, 60, 6),
    (EmissionCategory.TRANSPORTATION, "bus", 2, 25, 3),
    (EmissionCategory.TRANSPORTATION, "train", 10, 120, 2),
    (EmissionCategory.TRANSPORTATION, "bicycle", 2, 15, 2),
    (EmissionCategory.TRANSPORTATION, "plane", 300, 1500, 1),
    (EmissionCategory.ENERGY, "electricity", 5, 20, 5),
    (EmissionCategory.ENERGY, "natural_gas", 1, 6, 2),
    (EmissionCategory.DIET, "beef", 0.2, 0.6, 2),
    (EmissionCategory.DIET, "chicken", 0.2, 0.8, 3),
    (EmissionCategory.DIET, "vegetables", 0.5, 2, 4),
    (EmissionCategory.SHOPPING, "clothing", 1, 3, 1),
    (EmissionCategory.WASTE, "food", 0.2, 1.5, 2),
    (EmissionCategory.WASTE, "plastic", 0.1, 0.5, 2),
)


class DemoSeeder:
    """Seeds one demo account with sample emissions."""

    def __init__(self, session: AsyncSession | None = None, seed: int = 42):
        """
        Args:
            session: Optional async database session. If not provided, one is
                opened when entering the context manager.
            seed: Random seed so repeated runs produce the same sample
        """
        self._session = session
        self._external_session = session is not None
        self._random = random.Random(seed)

    async def __aenter__(self):
        if not self._external_session:
            self._db_context = Database()
            self._session = await self._db_context.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if not self._external_session:
            await self._db_context.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("Session not initialized. Use as context manager.")
        return self._session

    async def get_or_create_demo_user(self) -> tuple[UserDBModel, bool]:
        """
        Returns:
            (demo user, True if it was created by this call)
        """
        users = UserRepository(self.session)
        user = await users.get_by_email(DEMO_EMAIL)
        if user is not None:
            return user, False

        user = await users.create(
            username=DEMO_USERNAME,
            email=DEMO_EMAIL,
            password_hash=hash_password(DEMO_PASSWORD),
            first_name="Demo",
            last_name="User",
        )
        logger.info(f"Created demo user {user.id}")
        return user, True

    def sample_activity(self, moment: datetime) -> dict[str, Any]:
        """One random activity at `moment`, with its CO2e."""
        category, activity, low, high, _ = self._random.choices(
            SAMPLE_ACTIVITIES, weights=[row[4] for row in SAMPLE_ACTIVITIES]
        )[0]
        amount = Decimal(str(round(self._random.uniform(low, high), 2)))
        passengers = (
            self._random.choice((1, 1, 1, 2, 3))
            if category == EmissionCategory.TRANSPORTATION
            else 1
        )
        return dict(
            category=category,
            activity=activity,
            amount=amount,
            unit=DEFAULT_UNITS[category],
            passengers=passengers,
            co2e=EmissionCalculator.quantify(
                category, activity, amount, passengers=passengers
            ),
            date=moment,
            notes="",
            tags=["demo"],
        )

    async def seed_emissions(
        self, user: UserDBModel, days: int = 365, per_day: int = 2
    ) -> dict[str, Any]:
        """Log up to `per_day` activities for each of the last `days` days."""
        repository = EmissionRepository(self.session)
        now = datetime.utcnow()
        created = 0
        by_category: dict[str, Decimal] = {}

        for offset in range(days):
            day = now - timedelta(days=offset)
            for _ in range(self._random.randint(0, per_day)):
                moment = day.replace(
                    hour=self._random.randint(6, 22),
                    minute=self._random.randint(0, 59),
                )
                if moment > now:
                    moment = now
                data = self.sample_activity(moment)
                await repository.create(user_id=user.id, **data)
                created += 1
                by_category[data["category"]] = (
                    by_category.get(data["category"], Decimal("0")) + data["co2e"]
                )

        return {"emissions": created, "by_category": by_category}

    async def _clear_existing_data(self, user: UserDBModel):
        await self.session.execute(
            delete(EmissionDBModel).where(EmissionDBModel.user_id == user.id)
        )
        await self.session.flush()
        logger.info(f"Cleared emissions of user {user.id}")

    async def seed_all(
        self, clear_existing: bool = False, days: int = 365, per_day: int = 2
    ) -> dict[str, Any]:
        """
        Seed the demo account.

        Args:
            clear_existing: Delete the demo account's emissions first
            days: How many days back to generate
            per_day: Maximum activities per day

        Returns:
            Statistics about what was created
        """
        try:
            user, user_created = await self.get_or_create_demo_user()
            if clear_existing and not user_created:
                await self._clear_existing_data(user)

            stats = await self.seed_emissions(user, days=days, per_day=per_day)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        stats.update(user=user.email, user_created=user_created)
        logger.info(f"Seeded {stats['emissions']} emissions for {user.email}")
        return stats
