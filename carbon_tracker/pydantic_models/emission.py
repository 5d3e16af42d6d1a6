"""
Pydantic models for logged emissions.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from carbon_tracker.utils.constants import (
    AMOUNT_DECIMAL_PLACES,
    AMOUNT_MAX_DIGITS,
    NOTES_MAX_LENGTH,
    EmissionCategoryEnum,
)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Convert an aware datetime to naive UTC, the form stored in DateTime columns.

    Naive values are assumed to be UTC already and returned unchanged.
    """
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _normalize_occurrence_date(value: Optional[datetime]) -> Optional[datetime]:
    """Convert to naive UTC and reject dates in the future."""
    value = to_naive_utc(value)
    if value is not None and value > datetime.utcnow():
        raise ValueError("Date cannot be in the future")
    return value


class EmissionCreate(BaseModel):
    """Model for logging a new activity."""

    category: EmissionCategoryEnum = Field(..., examples=["transportation"])
    activity: str = Field(
        ..., min_length=1, max_length=100, description="Activity key", examples=["car"]
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES,
        description="Quantity in the category's unit",
        examples=[Decimal("50")],
    )
    unit: str = Field(..., min_length=1, max_length=50, examples=["km"])
    passengers: int = Field(
        1,
        ge=0,
        description="People sharing the trip; divides transportation CO2e when > 0",
        examples=[1],
    )
    co2e: Optional[Decimal] = Field(
        None,
        ge=0,
        description="Accepted for compatibility; the server always recalculates",
    )
    date: Optional[datetime] = Field(
        None, description="When the activity occurred (defaults to now)"
    )
    notes: Optional[str] = Field(None, max_length=NOTES_MAX_LENGTH)
    tags: list[str] = Field(default_factory=list)

    @field_validator("activity", "unit")
    @classmethod
    def strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("date")
    @classmethod
    def date_not_in_future(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _normalize_occurrence_date(value)


class EmissionUpdate(BaseModel):
    """Partial update; omitted fields keep their stored value."""

    category: Optional[EmissionCategoryEnum] = None
    activity: Optional[str] = Field(None, min_length=1, max_length=100)
    amount: Optional[Decimal] = Field(
        None,
        ge=0,
        max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES,
    )
    unit: Optional[str] = Field(None, min_length=1, max_length=50)
    passengers: Optional[int] = Field(None, ge=0)
    date: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=NOTES_MAX_LENGTH)
    tags: Optional[list[str]] = None

    @field_validator("activity", "unit")
    @classmethod
    def strip_text(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("date")
    @classmethod
    def date_not_in_future(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _normalize_occurrence_date(value)


class EmissionPydModel(BaseModel):
    """Model for emission response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    category: str
    activity: str
    amount: Decimal
    unit: str
    passengers: int
    co2e: Decimal
    date: datetime
    notes: Optional[str] = None
    tags: Optional[list[str]] = None
    created_at: datetime
    updated_at: datetime

    @computed_field
    @property
    def formatted_date(self) -> str:
        return self.date.strftime("%Y-%m-%d")


class Pagination(BaseModel):
    """Page position of a list response."""

    current: int = Field(..., examples=[1])
    pages: int = Field(..., examples=[3])
    total: int = Field(..., examples=[25])


class EmissionListResponse(BaseModel):
    """One page of the caller's emissions, newest first."""

    results: int = Field(..., description="Number of records on this page")
    emissions: list[EmissionPydModel]
    pagination: Pagination


class AvailableActivities(BaseModel):
    """Activity keys and factors defined for a category."""

    category: str = Field(..., examples=["transportation"])
    activities: list[str] = Field(..., examples=[["car", "bus", "train"]])
    factors: dict[str, Decimal] = Field(default_factory=dict)
    unit: Optional[str] = Field(None, examples=["km"])
