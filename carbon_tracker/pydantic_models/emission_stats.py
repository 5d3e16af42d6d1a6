"""
Pydantic models for emission statistics and analytics.

CO2e values are kg, rounded to 2 decimal places unless noted otherwise.
"""

from pydantic import BaseModel, Field

from carbon_tracker.pydantic_models.emission import EmissionPydModel


class CategoryTotal(BaseModel):
    """Totals for one category."""

    category: str = Field(..., examples=["diet"])
    total_co2: float = Field(
        ..., description="Unrounded sum of CO2e in kg", examples=[54.0]
    )
    count: int = Field(..., description="Number of records", examples=[1])
    average_co2: float = Field(
        ..., description="Mean CO2e per record", examples=[54.0]
    )


class CategorySummary(BaseModel):
    """Per-category totals for a period, largest first."""

    period: str = Field(..., examples=["month"])
    total_emissions: float = Field(..., examples=[77.0])
    total_entries: int = Field(..., examples=[3])
    categories: list[CategoryTotal] = Field(default_factory=list)


class TimeBucket(BaseModel):
    """One day (YYYY-MM-DD) or month (YYYY-MM) of emissions."""

    date: str = Field(..., examples=["2025-11-25"])
    total_co2: float = Field(..., examples=[12.5])
    count: int = Field(..., examples=[1])


class EmissionsOverTime(BaseModel):
    """Chronological, sparse series of buckets."""

    period: str = Field(..., examples=["month"])
    emissions_over_time: list[TimeBucket] = Field(default_factory=list)


class ActivityTotal(BaseModel):
    """Totals for one activity within a category."""

    activity: str = Field(..., examples=["car"])
    total_co2: float = Field(..., examples=[10.5])
    count: int = Field(..., examples=[1])


class CategoryBreakdownItem(BaseModel):
    """A category with its activities."""

    category: str = Field(..., examples=["transportation"])
    activities: list[ActivityTotal] = Field(default_factory=list)
    category_total: float = Field(..., examples=[10.5])


class CategoryBreakdown(BaseModel):
    """Two-level category/activity breakdown, largest category first."""

    period: str = Field(..., examples=["month"])
    breakdown: list[CategoryBreakdownItem] = Field(default_factory=list)


class AnalyticsOverview(BaseModel):
    """Dashboard payload combining the summaries with recent records."""

    period: str = Field(..., examples=["month"])
    by_category: list[CategoryTotal] = Field(default_factory=list)
    weekly_trends: list[TimeBucket] = Field(default_factory=list)
    total: float = Field(..., examples=[77.0])
    count: int = Field(..., examples=[3])
    recent_emissions: list[EmissionPydModel] = Field(default_factory=list)
