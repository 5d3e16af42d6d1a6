"""
Emissions API router.

CRUD for the caller's logged emissions plus the period statistics and the
activity catalogue used to populate entry forms.
"""

import logging
from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_tracker.core.config import Config
from carbon_tracker.core.dependencies import (
    get_app_config,
    get_current_user_id,
    get_db_session,
)
from carbon_tracker.pydantic_models.emission import (
    AvailableActivities,
    EmissionCreate,
    EmissionListResponse,
    EmissionPydModel,
    EmissionUpdate,
)
from carbon_tracker.pydantic_models.emission_stats import (
    CategoryBreakdown,
    CategorySummary,
    EmissionsOverTime,
)
from carbon_tracker.services.aggregators import EmissionAggregator
from carbon_tracker.services.calculators import EmissionCalculator
from carbon_tracker.services.calculators.emission_factors import (
    DEFAULT_UNITS,
    EMISSION_FACTORS,
)
from carbon_tracker.services.emission_service import EmissionService
from carbon_tracker.utils.exceptions import ValidationFailed

router = APIRouter(
    prefix="/api/v1/emissions",
    tags=["Emissions"],
)

logger = logging.getLogger(__name__)

PERIOD_DESCRIPTION = "week, month, year or all; anything else is treated as month"


def parse_emission_id(emission_id: str) -> UUID:
    try:
        return UUID(emission_id)
    except ValueError:
        raise ValidationFailed("Invalid emission ID")


@router.post(
    "", response_model=EmissionPydModel, status_code=status.HTTP_201_CREATED
)
async def create_emission(
    payload: EmissionCreate,
    user_id: UUID = Depends(get_current_user_id),
    config: Config = Depends(get_app_config),
    session: AsyncSession = Depends(get_db_session),
):
    """
    Log an activity; CO2e is calculated from the category's emission factor.

    Example:
        ```json
        POST /api/v1/emissions
        {"category": "transportation", "activity": "car", "amount": 50, "unit": "km"}
        ```
    """
    service = EmissionService(
        session, strict_activity_lookup=config.strict_activity_lookup
    )
    emission = await service.create(user_id, payload)
    await session.commit()
    return emission


@router.get("", response_model=EmissionListResponse)
async def list_emissions(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    category: str | None = Query(None, description="Filter by category"),
    start_date: datetime | None = Query(None, description="Earliest date (inclusive)"),
    end_date: datetime | None = Query(None, description="Latest date (inclusive)"),
    user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """List the caller's emissions, newest first."""
    logger.info(
        f"Listing emissions for user {user_id}: page={page}, limit={limit}, "
        f"category={category}, start={start_date}, end={end_date}"
    )
    service = EmissionService(session)
    return await service.list_emissions(
        user_id,
        page=page,
        limit=limit,
        category=category or None,
        start_date=start_date,
        end_date=end_date,
    )


@router.get("/stats/summary", response_model=CategorySummary)
async def get_stats_summary(
    period: str = Query("month", description=PERIOD_DESCRIPTION),
    user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Totals, counts and averages per category, largest first."""
    logger.info(f"Fetching stats summary for user {user_id}, period={period}")
    return await EmissionAggregator(session).category_totals(user_id, period)


@router.get("/stats/over-time", response_model=EmissionsOverTime)
async def get_stats_over_time(
    period: str = Query("month", description=PERIOD_DESCRIPTION),
    user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Daily (week, month) or monthly (year) CO2e series for charts."""
    logger.info(f"Fetching over-time stats for user {user_id}, period={period}")
    return await EmissionAggregator(session).emissions_over_time(user_id, period)


@router.get("/stats/category-breakdown", response_model=CategoryBreakdown)
async def get_category_breakdown(
    period: str = Query("month", description=PERIOD_DESCRIPTION),
    user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Per-activity totals grouped under their category."""
    logger.info(f"Fetching category breakdown for user {user_id}, period={period}")
    return await EmissionAggregator(session).category_breakdown(user_id, period)


@router.get("/activities/{category}", response_model=AvailableActivities)
async def get_available_activities(
    category: str,
    user_id: UUID = Depends(get_current_user_id),
):
    """Activity keys (and their factors) for a category; empty when unknown."""
    activities = EmissionCalculator.available_activities(category)
    return AvailableActivities(
        category=category,
        activities=activities,
        factors=dict(EMISSION_FACTORS.get(category, {})),
        unit=DEFAULT_UNITS.get(category),
    )


@router.get("/{emission_id}", response_model=EmissionPydModel)
async def get_emission(
    emission_id: str,
    user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Get one of the caller's emissions."""
    service = EmissionService(session)
    return await service.get(user_id, parse_emission_id(emission_id))


@router.put("/{emission_id}", response_model=EmissionPydModel)
async def update_emission(
    emission_id: str,
    payload: EmissionUpdate,
    user_id: UUID = Depends(get_current_user_id),
    config: Config = Depends(get_app_config),
    session: AsyncSession = Depends(get_db_session),
):
    """
    Edit one of the caller's emissions.

    CO2e is recalculated in the same write when category, activity, amount or
    passengers change.
    """
    service = EmissionService(
        session, strict_activity_lookup=config.strict_activity_lookup
    )
    emission = await service.update(user_id, parse_emission_id(emission_id), payload)
    await session.commit()
    return emission


@router.delete("/{emission_id}")
async def delete_emission(
    emission_id: str,
    user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete one of the caller's emissions."""
    service = EmissionService(session)
    await service.delete(user_id, parse_emission_id(emission_id))
    await session.commit()
    return {"message": "Emission deleted successfully"}
