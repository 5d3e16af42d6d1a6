"""
Analytics API router.

Single-call dashboard payload.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_tracker.core.dependencies import get_current_user_id, get_db_session
from carbon_tracker.pydantic_models.emission_stats import AnalyticsOverview
from carbon_tracker.services.aggregators import EmissionAggregator

router = APIRouter(
    prefix="/api/v1/analytics",
    tags=["Analytics"],
)

logger = logging.getLogger(__name__)


@router.get("", response_model=AnalyticsOverview)
async def get_analytics(
    period: str = Query("month", description="week, month, year or all"),
    user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """
    Category totals for the period, last week's daily trend and up to 100 of
    the most recent records from the last year.
    """
    logger.info(f"Fetching analytics overview for user {user_id}, period={period}")
    return await EmissionAggregator(session).overview(user_id, period)
