"""
Emission Aggregation Service.

Summarizes a user's logged emissions over a period window into category
totals, a time-bucketed series and a category/activity breakdown. All three
share one filter (owner + window) and one grouping primitive, a GROUP BY in
the database; they differ only in the grouping key and the output shape.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_tracker.database.repositories import EmissionRepository
from carbon_tracker.database.schemas import EmissionDBModel
from carbon_tracker.pydantic_models.emission import EmissionPydModel
from carbon_tracker.pydantic_models.emission_stats import (
    ActivityTotal,
    AnalyticsOverview,
    CategoryBreakdown,
    CategoryBreakdownItem,
    CategorySummary,
    CategoryTotal,
    EmissionsOverTime,
    TimeBucket,
)
from carbon_tracker.services.aggregators.period import PeriodWindow
from carbon_tracker.utils.constants import (
    DAILY_BUCKET_FORMAT,
    MONTHLY_BUCKET_FORMAT,
    RECENT_EMISSIONS_LIMIT,
    Period,
)

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


def round_co2e(value: Decimal) -> float:
    """Round a CO2e amount to 2 decimal places for output."""
    return float(value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


@dataclass
class Group:
    """Total and count for one grouping key."""

    total: Decimal = Decimal("0")
    count: int = 0

    @property
    def average(self) -> Decimal:
        return self.total / self.count if self.count else Decimal("0")


def bucket_format(period: str) -> str:
    """Monthly buckets for a year window, daily buckets otherwise."""
    return MONTHLY_BUCKET_FORMAT if period == Period.YEAR else DAILY_BUCKET_FORMAT


# to_char patterns matching the strftime bucket formats
POSTGRES_BUCKET_FORMATS = {
    DAILY_BUCKET_FORMAT: "YYYY-MM-DD",
    MONTHLY_BUCKET_FORMAT: "YYYY-MM",
}


def bucket_expression(column, fmt: str, dialect_name: str):
    """SQL expression labelling a datetime column with its bucket."""
    if dialect_name == "sqlite":
        return func.strftime(fmt, column)
    return func.to_char(column, POSTGRES_BUCKET_FORMATS[fmt])


class EmissionAggregator:
    """
    Service for summarizing one user's emissions over a period.

    Empty windows produce empty shapes with zero totals, never an error.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = EmissionRepository(session)

    async def group_totals(
        self, user_id: UUID, window: PeriodWindow, *keys
    ) -> dict[tuple[Any, ...], Group]:
        """
        Sum co2e and count the user's records in the window per key.

        Grouping runs in the database. Groups come back in first-occurrence
        order of their key and their sums are not rounded.

        Args:
            user_id: Owner UUID
            window: Period window to filter on
            *keys: Labelled column expressions to group by

        Returns:
            Mapping of key values (one per expression) to their Group
        """
        rows = await self.repository.sum_co2e_by(
            user_id, window.start, window.end, *keys
        )
        groups = {}
        for row in rows:
            *key, total, records = row
            groups[tuple(key)] = Group(total=Decimal(str(total)), count=records)
        return groups

    async def category_totals(
        self,
        user_id: UUID,
        period: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> CategorySummary:
        """
        Per-category total, count and average, largest total first.

        The grand total is summed from the unrounded group totals and rounded
        once at output.
        """
        window = PeriodWindow.resolve(period, now=now)
        by_key = await self.group_totals(
            user_id, window, EmissionDBModel.category.label("category")
        )
        groups = {category: group for (category,), group in by_key.items()}

        ordered = sorted(groups.items(), key=lambda item: item[1].total, reverse=True)
        grand_total = sum((group.total for group in groups.values()), Decimal("0"))
        grand_count = sum(group.count for group in groups.values())

        logger.debug(
            f"Category totals for user {user_id} ({window.period}): "
            f"{len(groups)} categories, {grand_count} records"
        )

        return CategorySummary(
            period=window.period,
            total_emissions=round_co2e(grand_total),
            total_entries=grand_count,
            categories=[
                CategoryTotal(
                    category=category,
                    total_co2=float(group.total),
                    count=group.count,
                    average_co2=round_co2e(group.average),
                )
                for category, group in ordered
            ],
        )

    async def emissions_over_time(
        self,
        user_id: UUID,
        period: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> EmissionsOverTime:
        """
        CO2e per calendar bucket in ascending order.

        Only buckets holding at least one record are emitted.
        """
        window = PeriodWindow.resolve(period, now=now)
        bucket = bucket_expression(
            EmissionDBModel.date,
            bucket_format(window.period),
            self.session.get_bind().dialect.name,
        ).label("bucket")
        groups = await self.group_totals(user_id, window, bucket)

        return EmissionsOverTime(
            period=window.period,
            emissions_over_time=[
                TimeBucket(date=label, total_co2=round_co2e(group.total), count=group.count)
                for (label,), group in sorted(groups.items(), key=lambda item: item[0])
            ],
        )

    async def category_breakdown(
        self,
        user_id: UUID,
        period: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> CategoryBreakdown:
        """
        Totals per (category, activity), regrouped under each category.

        Categories are ordered by descending total; activities keep the order
        in which they first occur in the window.
        """
        window = PeriodWindow.resolve(period, now=now)
        pairs = await self.group_totals(
            user_id,
            window,
            EmissionDBModel.category.label("category"),
            EmissionDBModel.activity.label("activity"),
        )

        categories: dict[str, list[tuple[str, Group]]] = {}
        for (category, activity), group in pairs.items():
            categories.setdefault(category, []).append((activity, group))

        items = []
        for category, activities in categories.items():
            category_total = sum((group.total for _, group in activities), Decimal("0"))
            items.append(
                (
                    category_total,
                    CategoryBreakdownItem(
                        category=category,
                        activities=[
                            ActivityTotal(
                                activity=activity,
                                total_co2=round_co2e(group.total),
                                count=group.count,
                            )
                            for activity, group in activities
                        ],
                        category_total=round_co2e(category_total),
                    ),
                )
            )

        items.sort(key=lambda item: item[0], reverse=True)
        return CategoryBreakdown(
            period=window.period, breakdown=[item for _, item in items]
        )

    async def overview(
        self,
        user_id: UUID,
        period: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AnalyticsOverview:
        """
        Dashboard view: category totals for the period, the daily series of
        the last week and the most recent records of the last year.
        """
        now = now or datetime.utcnow()
        summary = await self.category_totals(user_id, period, now=now)
        weekly = await self.emissions_over_time(user_id, Period.WEEK, now=now)

        year = PeriodWindow.resolve(Period.YEAR, now=now)
        recent = await self.repository.get_recent(
            user_id, since=year.start, limit=RECENT_EMISSIONS_LIMIT
        )

        return AnalyticsOverview(
            period=summary.period,
            by_category=summary.categories,
            weekly_trends=weekly.emissions_over_time,
            total=summary.total_emissions,
            count=summary.total_entries,
            recent_emissions=[EmissionPydModel.model_validate(r) for r in recent],
        )
