"""
Service tests for the CO2e quantifier.
"""

from decimal import Decimal

import pytest

from carbon_tracker.services.calculators import EMISSION_FACTORS, EmissionCalculator
from carbon_tracker.utils.exceptions import UnknownActivity


@pytest.mark.asyncio
async def test_quantify_uses_table_factor_without_rounding():
    """Every defined pair yields quantity * factor exactly."""
    quantity = Decimal("12.345")
    for category, factors in EMISSION_FACTORS.items():
        for activity, factor in factors.items():
            assert (
                EmissionCalculator.quantify(category, activity, quantity)
                == quantity * factor
            )


@pytest.mark.asyncio
async def test_quantify_known_values():
    assert EmissionCalculator.quantify("transportation", "car", 50) == Decimal("10.5")
    assert EmissionCalculator.quantify("energy", "electricity", 25) == Decimal("12.5")
    assert EmissionCalculator.quantify("diet", "beef", 2) == Decimal("54")
    assert EmissionCalculator.quantify("waste", "plastic", 4) == Decimal("12")
    assert EmissionCalculator.quantify("shopping", "plastic", 4) == Decimal("24")


@pytest.mark.asyncio
async def test_quantify_float_input_is_exact():
    """0.1 km by car is 0.021, not a binary float approximation."""
    assert EmissionCalculator.quantify("transportation", "car", 0.1) == Decimal("0.021")


@pytest.mark.asyncio
async def test_quantify_unknown_pair_falls_back_to_factor_one():
    assert EmissionCalculator.quantify("diet", "tofu", 3) == Decimal("3")
    assert EmissionCalculator.quantify("gardening", "mowing", Decimal("7.5")) == Decimal(
        "7.5"
    )


@pytest.mark.asyncio
async def test_quantify_zero_factor_activity():
    assert EmissionCalculator.quantify("transportation", "bicycle", 100) == Decimal("0")


@pytest.mark.asyncio
async def test_quantify_divides_transportation_by_passengers():
    unshared = EmissionCalculator.quantify("transportation", "car", 100)
    shared = EmissionCalculator.quantify("transportation", "car", 100, passengers=4)

    assert shared == unshared / 4
    assert shared == Decimal("5.25")


@pytest.mark.asyncio
@pytest.mark.parametrize("passengers", [0, -2])
async def test_quantify_skips_division_for_non_positive_passengers(passengers):
    assert EmissionCalculator.quantify(
        "transportation", "car", 100, passengers=passengers
    ) == EmissionCalculator.quantify("transportation", "car", 100)


@pytest.mark.asyncio
async def test_quantify_ignores_passengers_outside_transportation():
    assert EmissionCalculator.quantify(
        "energy", "electricity", 10, passengers=5
    ) == Decimal("5")


@pytest.mark.asyncio
async def test_quantify_strict_rejects_unknown_activity():
    with pytest.raises(UnknownActivity) as exc_info:
        EmissionCalculator.quantify("transportation", "carr", 10, strict=True)

    assert exc_info.value.status_code == 400
    assert exc_info.value.suggestion == "car"
    assert "car" in exc_info.value.detail


@pytest.mark.asyncio
async def test_quantify_strict_accepts_known_activity():
    assert EmissionCalculator.quantify(
        "energy", "propane", 2, strict=True
    ) == Decimal("3")


@pytest.mark.asyncio
async def test_available_activities_in_table_order():
    assert EmissionCalculator.available_activities("energy") == [
        "electricity",
        "natural_gas",
        "heating_oil",
        "propane",
    ]
    assert EmissionCalculator.available_activities("unknown") == []


@pytest.mark.asyncio
async def test_suggest_activity():
    assert EmissionCalculator.suggest_activity("energy", "electrcity") == "electricity"
    assert EmissionCalculator.suggest_activity("energy", "xyz") is None
    assert EmissionCalculator.suggest_activity("unknown", "car") is None


@pytest.mark.asyncio
async def test_factor_table_is_read_only():
    with pytest.raises(TypeError):
        EMISSION_FACTORS["diet"]["beef"] = Decimal("1")


@pytest.mark.asyncio
async def test_factor_of_returns_raw_factor():
    assert EmissionCalculator.factor_of("diet", "beef") == Decimal("27.0")
    assert EmissionCalculator.factor_of("transportation", "bicycle") == Decimal("0")


@pytest.mark.asyncio
async def test_factor_of_absent_pair_is_one():
    assert EmissionCalculator.factor_of("diet", "tofu") == Decimal("1")
    assert EmissionCalculator.factor_of("gardening", "mowing") == Decimal("1")
    assert EmissionCalculator.find_factor("diet", "tofu") is None
