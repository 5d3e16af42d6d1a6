"""
Emission aggregation services.
"""
from carbon_tracker.services.aggregators.emission_aggregator import EmissionAggregator
from carbon_tracker.services.aggregators.period import PeriodWindow

__all__ = ["EmissionAggregator", "PeriodWindow"]
