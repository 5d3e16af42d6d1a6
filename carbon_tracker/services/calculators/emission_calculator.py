"""
Emission quantification.

Turns a logged (category, activity, quantity) into kg CO2e using the static
factor table. Stateless and free of I/O, so it is safe to call from any
request handler concurrently.
"""

import logging
from decimal import Decimal
from typing import Optional

from rapidfuzz import fuzz, process

from carbon_tracker.services.calculators.emission_factors import (
    EMISSION_FACTORS,
    FALLBACK_FACTOR,
)
from carbon_tracker.utils.constants import EmissionCategory
from carbon_tracker.utils.exceptions import UnknownActivity

logger = logging.getLogger(__name__)


class EmissionCalculator:
    """
    CO2e quantifier over the static emission factor table.

    Unknown (category, activity) pairs fall back to a factor of 1 unless
    strict lookup is requested, in which case UnknownActivity is raised.
    """

    # Minimum similarity (0-100) for an activity key suggestion
    SUGGESTION_THRESHOLD = 70

    @staticmethod
    def to_decimal(value: str | int | float | Decimal) -> Decimal:
        """
        Normalize a numeric value to Decimal.

        Example:
            >>> EmissionCalculator.to_decimal(0.1)
            Decimal('0.1')
        """
        if isinstance(value, Decimal):
            return value
        if isinstance(value, str):
            value = value.replace(",", "")
        return Decimal(str(value))

    @staticmethod
    def available_activities(category: str) -> list[str]:
        """
        Activity keys defined for a category, in table order.

        Returns an empty list for an unknown category.
        """
        return list(EMISSION_FACTORS.get(category, {}))

    @staticmethod
    def find_factor(category: str, activity: str) -> Optional[Decimal]:
        """Factor for the pair, or None when it is not in the table."""
        return EMISSION_FACTORS.get(category, {}).get(activity)

    @staticmethod
    def factor_of(category: str, activity: str) -> Decimal:
        """
        Factor for the pair, defaulting to 1 when it is not in the table.

        Example:
            >>> EmissionCalculator.factor_of("diet", "tofu")
            Decimal('1')
        """
        factor = EmissionCalculator.find_factor(category, activity)
        return FALLBACK_FACTOR if factor is None else factor

    @staticmethod
    def suggest_activity(category: str, activity: str) -> Optional[str]:
        """
        Closest known activity key for a misspelt one.

        Returns:
            The best match above SUGGESTION_THRESHOLD, or None
        """
        choices = EmissionCalculator.available_activities(category)
        if not choices or not activity:
            return None

        match = process.extractOne(
            activity.lower(),
            choices,
            scorer=fuzz.WRatio,
            score_cutoff=EmissionCalculator.SUGGESTION_THRESHOLD,
        )
        return match[0] if match else None

    @staticmethod
    def quantify(
        category: str,
        activity: str,
        quantity: str | int | float | Decimal,
        passengers: int = 1,
        strict: bool = False,
    ) -> Decimal:
        """
        Calculate kg CO2e for a logged activity.

        co2e = quantity * factor(category, activity). For transportation the
        result is shared between passengers when passengers > 0. No rounding is
        applied here.

        Args:
            category: Emission category
            activity: Activity key within the category
            quantity: Non-negative quantity in the category's unit
            passengers: Number of people sharing a trip (transportation only)
            strict: Raise UnknownActivity instead of falling back to factor 1

        Returns:
            CO2e in kg as Decimal

        Raises:
            UnknownActivity: If strict and the pair has no factor

        Example:
            >>> EmissionCalculator.quantify("transportation", "car", 50)
            Decimal('10.50')
        """
        if EmissionCalculator.find_factor(category, activity) is None:
            suggestion = EmissionCalculator.suggest_activity(category, activity)
            if strict:
                raise UnknownActivity(category, activity, suggestion)

            logger.warning(
                f"No emission factor for {category}/{activity}, "
                f"using fallback factor {FALLBACK_FACTOR}"
                + (f" (closest known activity: {suggestion})" if suggestion else "")
            )

        co2e = EmissionCalculator.to_decimal(quantity) * EmissionCalculator.factor_of(
            category, activity
        )

        if category == EmissionCategory.TRANSPORTATION and passengers > 0:
            co2e = co2e / passengers

        return co2e
