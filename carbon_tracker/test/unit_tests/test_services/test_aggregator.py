"""
Service tests for emission aggregation.
"""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from sqlalchemy.dialects import postgresql, sqlite

from carbon_tracker.database.schemas import EmissionDBModel
from carbon_tracker.pydantic_models.emission import EmissionUpdate
from carbon_tracker.services.aggregators import EmissionAggregator, PeriodWindow
from carbon_tracker.services.aggregators.emission_aggregator import (
    Group,
    bucket_expression,
    round_co2e,
)
from carbon_tracker.services.emission_service import EmissionService
from carbon_tracker.test.factory.emission import (
    BeefEmissionFactory,
    ElectricityEmissionFactory,
    EmissionFactory,
)
from carbon_tracker.test.factory.user import UserFactory

NOW = datetime(2024, 6, 15, 12, 0)


async def create_scenario(user_id, date=NOW - timedelta(days=2)):
    """Car 50 km, electricity 25 kWh and beef 2 kg: 10.5 + 12.5 + 54.0."""
    car = await EmissionFactory(user_id=user_id, date=date)
    electricity = await ElectricityEmissionFactory(user_id=user_id, date=date)
    beef = await BeefEmissionFactory(user_id=user_id, date=date)
    return car, electricity, beef


@pytest.mark.asyncio
async def test_group_totals_keeps_first_occurrence_order(test_db_session):
    user = await UserFactory()
    await BeefEmissionFactory(user_id=user.id, date=NOW - timedelta(days=3))
    await ElectricityEmissionFactory(user_id=user.id, date=NOW - timedelta(days=2))
    await BeefEmissionFactory(
        user_id=user.id, activity="fish", amount=Decimal("1"), date=NOW
    )

    groups = await EmissionAggregator(test_db_session).group_totals(
        user.id,
        PeriodWindow.resolve("week", now=NOW),
        EmissionDBModel.category.label("category"),
    )

    assert list(groups) == [("diet",), ("energy",)]
    assert groups[("diet",)].total == Decimal("59.1")
    assert groups[("diet",)].count == 2
    assert groups[("diet",)].average == Decimal("29.55")


@pytest.mark.asyncio
async def test_group_average_of_empty_group():
    assert Group().average == Decimal("0")


@pytest.mark.asyncio
async def test_round_co2e_half_up():
    assert round_co2e(Decimal("1.005")) == 1.01
    assert round_co2e(Decimal("2.344")) == 2.34


@pytest.mark.asyncio
async def test_category_totals_empty_window(test_db_session):
    user = await UserFactory()

    summary = await EmissionAggregator(test_db_session).category_totals(
        user.id, "month", now=NOW
    )

    assert summary.categories == []
    assert summary.total_emissions == 0
    assert summary.total_entries == 0


@pytest.mark.asyncio
async def test_category_totals_scenario(test_db_session):
    user = await UserFactory()
    await create_scenario(user.id)

    summary = await EmissionAggregator(test_db_session).category_totals(
        user.id, "month", now=NOW
    )

    totals = {item.category: item.total_co2 for item in summary.categories}
    assert totals == {"transportation": 10.5, "energy": 12.5, "diet": 54.0}
    assert [item.category for item in summary.categories] == [
        "diet",
        "energy",
        "transportation",
    ]
    assert summary.total_emissions == 77.0
    assert summary.total_entries == 3
    assert sum(totals.values()) == pytest.approx(summary.total_emissions)


@pytest.mark.asyncio
async def test_category_totals_average(test_db_session):
    user = await UserFactory()
    await EmissionFactory(user_id=user.id, amount=Decimal("10"), date=NOW)
    await EmissionFactory(user_id=user.id, amount=Decimal("20"), date=NOW)
    await EmissionFactory(user_id=user.id, amount=Decimal("5"), date=NOW)

    summary = await EmissionAggregator(test_db_session).category_totals(
        user.id, "week", now=NOW
    )

    (transportation,) = summary.categories
    assert transportation.count == 3
    assert transportation.total_co2 == pytest.approx(7.35)
    assert transportation.average_co2 == 2.45


@pytest.mark.asyncio
async def test_editing_quantity_recalculates_grand_total(test_db_session):
    user = await UserFactory()
    car, electricity, beef = await create_scenario(user.id)

    service = EmissionService(test_db_session)
    updated = await service.update(
        user.id, car.id, EmissionUpdate(amount=Decimal("100"))
    )
    await test_db_session.commit()

    assert updated.co2e == Decimal("21")

    summary = await EmissionAggregator(test_db_session).category_totals(
        user.id, "month", now=NOW
    )
    totals = {item.category: item.total_co2 for item in summary.categories}
    assert totals == {"transportation": 21.0, "energy": 12.5, "diet": 54.0}
    assert summary.total_emissions == 87.5


@pytest.mark.asyncio
async def test_totals_are_scoped_to_owner_and_window(test_db_session):
    user = await UserFactory()
    other = await UserFactory()
    await create_scenario(user.id)
    await create_scenario(other.id)
    await BeefEmissionFactory(user_id=user.id, date=NOW - timedelta(days=60))

    aggregator = EmissionAggregator(test_db_session)
    month = await aggregator.category_totals(user.id, "month", now=NOW)
    year = await aggregator.category_totals(user.id, "year", now=NOW)

    assert month.total_entries == 3
    assert month.total_emissions == 77.0
    assert year.total_entries == 4
    assert year.total_emissions == 131.0


@pytest.mark.asyncio
async def test_malformed_period_is_treated_as_month(test_db_session):
    user = await UserFactory()
    await create_scenario(user.id)
    await BeefEmissionFactory(user_id=user.id, date=NOW - timedelta(days=60))

    summary = await EmissionAggregator(test_db_session).category_totals(
        user.id, "decade", now=NOW
    )

    assert summary.period == "month"
    assert summary.total_emissions == 77.0


@pytest.mark.asyncio
async def test_emissions_over_time_is_sparse_and_sorted(test_db_session):
    user = await UserFactory()
    await EmissionFactory(user_id=user.id, date=NOW - timedelta(days=1))
    await EmissionFactory(user_id=user.id, date=NOW - timedelta(days=5, hours=1))
    await ElectricityEmissionFactory(user_id=user.id, date=NOW - timedelta(days=5))

    series = await EmissionAggregator(test_db_session).emissions_over_time(
        user.id, "week", now=NOW
    )

    assert [bucket.date for bucket in series.emissions_over_time] == [
        "2024-06-10",
        "2024-06-14",
    ]
    first, second = series.emissions_over_time
    assert first.total_co2 == 23.0
    assert first.count == 2
    assert second.total_co2 == 10.5
    assert second.count == 1


@pytest.mark.asyncio
async def test_emissions_over_time_year_uses_monthly_buckets(test_db_session):
    user = await UserFactory()
    await EmissionFactory(user_id=user.id, date=datetime(2024, 1, 3))
    await EmissionFactory(user_id=user.id, date=datetime(2024, 1, 20))
    await BeefEmissionFactory(user_id=user.id, date=datetime(2024, 5, 2))

    series = await EmissionAggregator(test_db_session).emissions_over_time(
        user.id, "year", now=NOW
    )

    assert series.period == "year"
    assert [(b.date, b.total_co2, b.count) for b in series.emissions_over_time] == [
        ("2024-01", 21.0, 2),
        ("2024-05", 54.0, 1),
    ]


@pytest.mark.asyncio
async def test_category_breakdown_sums_match(test_db_session):
    user = await UserFactory()
    await create_scenario(user.id)
    await EmissionFactory(
        user_id=user.id, activity="bus", amount=Decimal("100"), date=NOW
    )
    await EmissionFactory(user_id=user.id, date=NOW)

    breakdown = await EmissionAggregator(test_db_session).category_breakdown(
        user.id, "month", now=NOW
    )

    assert [item.category for item in breakdown.breakdown] == [
        "diet",
        "transportation",
        "energy",
    ]
    for item in breakdown.breakdown:
        assert sum(a.total_co2 for a in item.activities) == pytest.approx(
            item.category_total
        )

    transportation = breakdown.breakdown[1]
    assert transportation.category_total == 29.0
    assert [(a.activity, a.total_co2, a.count) for a in transportation.activities] == [
        ("car", 21.0, 2),
        ("bus", 8.0, 1),
    ]


@pytest.mark.asyncio
async def test_overview_combines_views(test_db_session):
    user = await UserFactory()
    await create_scenario(user.id)
    await EmissionFactory(user_id=user.id, date=NOW - timedelta(days=400))

    overview = await EmissionAggregator(test_db_session).overview(
        user.id, "month", now=NOW
    )

    assert overview.period == "month"
    assert overview.total == 77.0
    assert overview.count == 3
    assert len(overview.by_category) == 3
    assert [b.date for b in overview.weekly_trends] == ["2024-06-13"]
    assert len(overview.recent_emissions) == 3


@pytest.mark.asyncio
async def test_bucket_expression_per_dialect():
    monthly_pg = bucket_expression(EmissionDBModel.date, "%Y-%m", "postgresql")
    daily_sqlite = bucket_expression(EmissionDBModel.date, "%Y-%m-%d", "sqlite")

    pg_sql = str(
        monthly_pg.compile(
            dialect=postgresql.dialect(), compile_kwargs={"literal_binds": True}
        )
    )
    sqlite_sql = str(
        daily_sqlite.compile(
            dialect=sqlite.dialect(), compile_kwargs={"literal_binds": True}
        )
    )

    assert pg_sql.startswith("to_char(emissions.date")
    assert "'YYYY-MM'" in pg_sql
    assert sqlite_sql.startswith("strftime(")
    assert "'%Y-%m-%d'" in sqlite_sql
