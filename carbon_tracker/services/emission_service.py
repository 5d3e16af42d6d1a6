"""
Emission record service.

Creates, edits and deletes a user's logged emissions, quantifying CO2e before
the single flush that persists the record so stored co2e never lags behind
category, activity, amount or passengers.
"""

import logging
import math
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from carbon_tracker.database.repositories import EmissionRepository
from carbon_tracker.database.schemas import EmissionDBModel
from carbon_tracker.pydantic_models.emission import (
    EmissionCreate,
    EmissionListResponse,
    EmissionPydModel,
    EmissionUpdate,
    Pagination,
    to_naive_utc,
)
from carbon_tracker.services.calculators import EmissionCalculator
from carbon_tracker.utils.exceptions import NotFound

logger = logging.getLogger(__name__)

# Fields whose change requires recalculating co2e
QUANTIFIED_FIELDS = ("category", "activity", "amount", "passengers")

# Optional fields an explicit null resets to empty
CLEARABLE_FIELDS = {"notes": str, "tags": list}


class EmissionService:
    """Owner-scoped emission CRUD with CO2e quantification."""

    def __init__(self, session: AsyncSession, strict_activity_lookup: bool = False):
        """
        Args:
            session: Database session
            strict_activity_lookup: Reject unknown activities instead of
                falling back to factor 1
        """
        self.session = session
        self.repository = EmissionRepository(session)
        self.strict_activity_lookup = strict_activity_lookup

    def _quantify(self, category: str, activity: str, amount, passengers: int):
        return EmissionCalculator.quantify(
            category,
            activity,
            amount,
            passengers=passengers,
            strict=self.strict_activity_lookup,
        )

    async def create(self, user_id: UUID, payload: EmissionCreate) -> EmissionDBModel:
        """
        Log a new activity for the user.

        A co2e value in the payload is ignored; it is always recalculated.
        """
        category = payload.category.value
        co2e = self._quantify(
            category, payload.activity, payload.amount, payload.passengers
        )

        emission = await self.repository.create(
            user_id=user_id,
            category=category,
            activity=payload.activity,
            amount=payload.amount,
            unit=payload.unit,
            passengers=payload.passengers,
            co2e=co2e,
            date=payload.date or datetime.utcnow(),
            notes=payload.notes or "",
            tags=payload.tags,
        )
        logger.info(
            f"Created emission {emission.id} for user {user_id}: "
            f"{category}/{payload.activity} = {co2e} kgCO2e"
        )
        return emission

    async def get(self, user_id: UUID, emission_id: UUID) -> EmissionDBModel:
        """
        Raises:
            NotFound: If the emission does not exist or is not the user's
        """
        emission = await self.repository.get_owned(emission_id, user_id)
        if emission is None:
            raise NotFound("No emission found with that ID")
        return emission

    async def list_emissions(
        self,
        user_id: UUID,
        page: int = 1,
        limit: int = 10,
        category: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> EmissionListResponse:
        """
        One page of the user's emissions, newest first.

        Aware filter bounds are compared as naive UTC, like stored dates.
        """
        emissions, total = await self.repository.list_for_user(
            user_id,
            skip=(page - 1) * limit,
            limit=limit,
            category=category,
            start_date=to_naive_utc(start_date),
            end_date=to_naive_utc(end_date),
        )
        return EmissionListResponse(
            results=len(emissions),
            emissions=[EmissionPydModel.model_validate(e) for e in emissions],
            pagination=Pagination(
                current=page, pages=math.ceil(total / limit), total=total
            ),
        )

    async def update(
        self, user_id: UUID, emission_id: UUID, payload: EmissionUpdate
    ) -> EmissionDBModel:
        """
        Apply a partial edit, recalculating co2e when a quantified field changes.

        Null notes or tags clear them; null on any other field leaves it as is.

        Raises:
            NotFound: If the emission does not exist or is not the user's
        """
        emission = await self.get(user_id, emission_id)

        changes = {}
        for field, value in payload.model_dump(exclude_unset=True).items():
            if value is not None:
                changes[field] = value
            elif field in CLEARABLE_FIELDS:
                changes[field] = CLEARABLE_FIELDS[field]()
        if "category" in changes:
            changes["category"] = payload.category.value

        if any(field in changes for field in QUANTIFIED_FIELDS):
            changes["co2e"] = self._quantify(
                changes.get("category", emission.category),
                changes.get("activity", emission.activity),
                changes.get("amount", emission.amount),
                changes.get("passengers", emission.passengers),
            )

        emission = await self.repository.apply_changes(emission, **changes)
        logger.info(f"Updated emission {emission.id} fields {sorted(changes)}")
        return emission

    async def delete(self, user_id: UUID, emission_id: UUID) -> None:
        """
        Raises:
            NotFound: If the emission does not exist or is not the user's
        """
        deleted = await self.repository.delete_owned(emission_id, user_id)
        if not deleted:
            raise NotFound("No emission found with that ID")
        logger.info(f"Deleted emission {emission_id} for user {user_id}")
