"""
CO2e quantification services.
"""
from carbon_tracker.services.calculators.emission_calculator import EmissionCalculator
from carbon_tracker.services.calculators.emission_factors import EMISSION_FACTORS

__all__ = ["EMISSION_FACTORS", "EmissionCalculator"]
